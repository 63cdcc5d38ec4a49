"""Unit tests for the thread builder."""

import random
from uuid import uuid4

from inkwell.domain.service.thread_builder import (
    ThreadNode,
    build_thread,
    count_nodes,
    find_node,
    iter_thread,
    make_snippet,
)
from inkwell.domain.value import CommentId, PostId
from tests.conftest import make_comment


def shape(forest: list[ThreadNode]) -> list[tuple]:
    """Nested (id, depth, replies) tuples for structural comparison."""
    return [(node.id, node.depth, shape(node.replies)) for node in forest]


def all_depths(forest: list[ThreadNode]) -> list[int]:
    return [node.depth for node in iter_thread(forest)]


class TestBuildThread:
    """Tests for build_thread."""

    def test_empty_input_gives_empty_forest(self):
        """No comments means no roots."""
        assert build_thread([], max_depth=5) == []

    def test_reply_chain_depths(self):
        """Each reply sits one level below the comment it answers."""
        # Arrange
        post_id = PostId(uuid4())
        first = make_comment(post_id, minutes=0, author_name="alice")
        second = make_comment(post_id, first.id, minutes=1, author_name="bob")
        third = make_comment(post_id, second.id, minutes=2)

        # Act
        forest = build_thread([first, second, third], max_depth=5)

        # Assert
        assert len(forest) == 1
        root = forest[0]
        assert root.id == first.id and root.depth == 0
        assert root.replies[0].id == second.id and root.replies[0].depth == 1
        assert root.replies[0].replies[0].id == third.id
        assert root.replies[0].replies[0].depth == 2

    def test_reply_carries_parent_author_and_snippet(self):
        """Replies know who and what they answer."""
        post_id = PostId(uuid4())
        parent = make_comment(
            post_id, author_name="alice", content="A rather long opening remark"
        )
        reply = make_comment(post_id, parent.id, minutes=1)

        forest = build_thread([parent, reply], max_depth=5, snippet_length=8)

        node = forest[0].replies[0]
        assert node.reply_to_author == "alice"
        assert node.reply_to_snippet == "A rather..."
        assert forest[0].reply_to_author is None

    def test_node_count_matches_input(self):
        """Every comment appears exactly once in the forest."""
        # Arrange - random tree of 60 comments
        rng = random.Random(7)
        post_id = PostId(uuid4())
        comments = []
        for i in range(60):
            parent = rng.choice(comments).id if comments and rng.random() < 0.7 else None
            comments.append(make_comment(post_id, parent, minutes=i))

        # Act
        forest = build_thread(comments, max_depth=3)

        # Assert
        ids = [node.id for node in iter_thread(forest)]
        assert len(ids) == 60
        assert set(ids) == {c.id for c in comments}
        assert count_nodes(forest) == 60
        assert all(0 <= d <= 3 for d in all_depths(forest))

    def test_missing_parent_becomes_root(self):
        """A reply to a comment that is not in the list is shown top-level."""
        post_id = PostId(uuid4())
        root = make_comment(post_id)
        orphan = make_comment(post_id, CommentId(uuid4()), minutes=1)

        forest = build_thread([root, orphan], max_depth=5)

        assert [n.id for n in forest] == [root.id, orphan.id]
        assert forest[1].depth == 0
        assert forest[1].reply_to_author is None

    def test_deleted_middle_of_chain_promotes_grandchild(self):
        """With the middle of a chain gone, the last comment becomes a root."""
        # Arrange - 1 <- 2 <- 3, then 2 is deleted
        post_id = PostId(uuid4())
        first = make_comment(post_id, minutes=0)
        second = make_comment(post_id, first.id, minutes=1)
        third = make_comment(post_id, second.id, minutes=2)

        # Act
        forest = build_thread([first, third], max_depth=5)

        # Assert
        assert [n.id for n in forest] == [first.id, third.id]
        assert forest[0].replies == []

    def test_parent_on_another_post_becomes_root(self):
        """Threading never crosses posts."""
        post_id = PostId(uuid4())
        foreign = make_comment(PostId(uuid4()))
        reply = make_comment(post_id, foreign.id, minutes=1)

        forest = build_thread([foreign, reply], max_depth=5)

        assert {n.id for n in forest} == {foreign.id, reply.id}
        assert all(n.depth == 0 for n in forest)

    def test_self_parent_becomes_root(self):
        """A comment naming itself as parent is a root."""
        post_id = PostId(uuid4())
        comment_id = CommentId(uuid4())
        comment = make_comment(post_id, comment_id, comment_id=comment_id)

        forest = build_thread([comment], max_depth=5)

        assert shape(forest) == [(comment_id, 0, [])]

    def test_two_comment_cycle_terminates(self):
        """A parent loop is broken at its earliest comment."""
        # Arrange - a -> b -> a
        post_id = PostId(uuid4())
        a_id, b_id = CommentId(uuid4()), CommentId(uuid4())
        a = make_comment(post_id, b_id, comment_id=a_id, minutes=0)
        b = make_comment(post_id, a_id, comment_id=b_id, minutes=1)

        # Act
        forest = build_thread([b, a], max_depth=5)

        # Assert
        assert shape(forest) == [(a_id, 0, [(b_id, 1, [])])]

    def test_longer_cycle_with_hanging_reply_terminates(self):
        """Every comment of a loop and its replies is placed once."""
        post_id = PostId(uuid4())
        ids = [CommentId(uuid4()) for _ in range(3)]
        loop = [
            make_comment(post_id, ids[(i + 1) % 3], comment_id=ids[i], minutes=i)
            for i in range(3)
        ]
        tail = make_comment(post_id, ids[1], minutes=10)

        forest = build_thread(loop + [tail], max_depth=5)

        assert count_nodes(forest) == 4
        assert [n.id for n in forest] == [ids[0]]

    def test_depth_beyond_max_is_flattened(self):
        """Deep replies attach to the nearest ancestor above the boundary."""
        # Arrange - chain of five with max depth 2
        post_id = PostId(uuid4())
        chain = [make_comment(post_id, minutes=0, author_name="c0")]
        for i in range(1, 5):
            chain.append(
                make_comment(post_id, chain[-1].id, minutes=i, author_name=f"c{i}")
            )

        # Act
        forest = build_thread(chain, max_depth=2)

        # Assert
        assert all_depths(forest) == [0, 1, 2, 2, 2]
        second = forest[0].replies[0]
        assert [n.id for n in second.replies] == [c.id for c in chain[2:]]
        # Breadcrumb still names the declared parent
        assert second.replies[1].reply_to_author == "c2"
        assert second.replies[2].reply_to_author == "c3"

    def test_max_depth_zero_gives_flat_list(self):
        """With no nesting allowed every comment is a root."""
        post_id = PostId(uuid4())
        first = make_comment(post_id)
        reply = make_comment(post_id, first.id, minutes=1)

        forest = build_thread([first, reply], max_depth=0)

        assert [n.id for n in forest] == [first.id, reply.id]
        assert all_depths(forest) == [0, 0]

    def test_duplicate_ids_are_placed_once(self):
        """A comment delivered twice is only shown once."""
        post_id = PostId(uuid4())
        comment = make_comment(post_id)

        forest = build_thread([comment, comment], max_depth=5)

        assert count_nodes(forest) == 1

    def test_input_order_does_not_matter(self):
        """Shuffled input builds the same forest."""
        # Arrange
        post_id = PostId(uuid4())
        root_a = make_comment(post_id, minutes=0)
        root_b = make_comment(post_id, minutes=1)
        reply_a1 = make_comment(post_id, root_a.id, minutes=2)
        reply_b1 = make_comment(post_id, root_b.id, minutes=3)
        reply_a2 = make_comment(post_id, root_a.id, minutes=4)
        nested = make_comment(post_id, reply_a1.id, minutes=5)
        comments = [root_a, root_b, reply_a1, reply_b1, reply_a2, nested]

        expected = shape(build_thread(comments, max_depth=5))
        shuffled = list(reversed(comments))

        # Act & Assert
        assert shape(build_thread(shuffled, max_depth=5)) == expected
        assert [n.id for n in build_thread(shuffled, max_depth=5)] == [
            root_a.id,
            root_b.id,
        ]

    def test_building_twice_is_identical(self):
        """Same comments in, same forest out."""
        post_id = PostId(uuid4())
        root = make_comment(post_id)
        comments = [root] + [
            make_comment(post_id, root.id, minutes=i) for i in range(1, 6)
        ]

        assert shape(build_thread(comments, max_depth=3)) == shape(
            build_thread(comments, max_depth=3)
        )

    def test_equal_timestamps_ordered_by_sequence(self):
        """Comments created in the same instant keep insertion order."""
        post_id = PostId(uuid4())
        later = make_comment(post_id, seq=2)
        earlier = make_comment(post_id, seq=1)

        forest = build_thread([later, earlier], max_depth=5)

        assert [n.id for n in forest] == [earlier.id, later.id]

    def test_reply_older_than_parent_still_nests(self):
        """Clock skew does not detach a reply from its parent."""
        post_id = PostId(uuid4())
        parent = make_comment(post_id, minutes=5)
        reply = make_comment(post_id, parent.id, minutes=0)

        forest = build_thread([reply, parent], max_depth=5)

        assert shape(forest) == [(parent.id, 0, [(reply.id, 1, [])])]

    def test_replies_ordered_oldest_first(self):
        """Sibling replies are in creation order."""
        post_id = PostId(uuid4())
        root = make_comment(post_id)
        replies = [make_comment(post_id, root.id, minutes=i) for i in (3, 1, 2)]

        forest = build_thread([root] + replies, max_depth=5)

        created = [n.comment.created_at for n in forest[0].replies]
        assert created == sorted(created)


class TestTraversal:
    """Tests for forest traversal helpers."""

    def test_iter_thread_is_pre_order(self):
        """Parents come before their replies, siblings in order."""
        post_id = PostId(uuid4())
        a = make_comment(post_id, minutes=0)
        a1 = make_comment(post_id, a.id, minutes=1)
        b = make_comment(post_id, minutes=2)
        a1x = make_comment(post_id, a1.id, minutes=3)

        forest = build_thread([a, a1, b, a1x], max_depth=5)

        assert [n.id for n in iter_thread(forest)] == [a.id, a1.id, a1x.id, b.id]

    def test_find_node(self):
        """find_node locates nested nodes and returns None for unknown ids."""
        post_id = PostId(uuid4())
        root = make_comment(post_id)
        reply = make_comment(post_id, root.id, minutes=1)
        forest = build_thread([root, reply], max_depth=5)

        assert find_node(forest, reply.id).comment == reply
        assert find_node(forest, CommentId(uuid4())) is None

    def test_deep_chain_does_not_recurse(self):
        """Very deep threads are traversed iteratively."""
        post_id = PostId(uuid4())
        chain = [make_comment(post_id)]
        for i in range(1, 3000):
            chain.append(make_comment(post_id, chain[-1].id, minutes=i))

        forest = build_thread(chain, max_depth=5000)

        assert count_nodes(forest) == 3000
        assert max(all_depths(forest)) == 2999


class TestMakeSnippet:
    """Tests for make_snippet."""

    def test_short_text_is_kept(self):
        assert make_snippet("hello", 10) == "hello"

    def test_whitespace_is_collapsed(self):
        assert make_snippet("  hello \n\n world ", 20) == "hello world"

    def test_long_text_is_truncated(self):
        assert make_snippet("abcdefghij klm", 10) == "abcdefghij..."
