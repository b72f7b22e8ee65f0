import pytest

from md_blog_server.content.assembler import RouteNotFound, build_feed, normalize_route, resolve
from md_blog_server.content.models import ContentIndex

from conftest import make_post


class TestResolve:

    def test_first_post_has_no_previous(self, sample_index):
        page = resolve(sample_index, "/blog/first")

        assert page.post.meta.title == "First"
        assert page.previous is None
        assert page.next.title == "Second"

    def test_last_post_has_no_next(self, sample_index):
        page = resolve(sample_index, "/blog/third")

        assert page.previous.title == "Second"
        assert page.next is None

    def test_interior_post_has_both_neighbours(self, sample_index):
        page = resolve(sample_index, "/blog/second")

        assert page.previous == sample_index.posts[0].meta
        assert page.next == sample_index.posts[2].meta

    def test_single_post_has_no_neighbours(self):
        index = ContentIndex.from_posts((make_post("Only", 1),))
        page = resolve(index, "/blog/only")
        assert page.previous is None and page.next is None

    def test_trailing_slash_ignored(self, sample_index):
        assert resolve(sample_index, "/blog/second/").post.meta.title == "Second"

    def test_unknown_path(self, sample_index):
        with pytest.raises(RouteNotFound) as excinfo:
            resolve(sample_index, "/blog/missing")
        assert excinfo.value.path == "/blog/missing"

    def test_not_found_is_lookup_error(self):
        with pytest.raises(LookupError):
            resolve(ContentIndex(), "/blog")

    def test_neighbours_follow_every_position(self, sample_index):
        posts = sample_index.posts
        for i, post in enumerate(posts):
            page = resolve(sample_index, post.path_from_root)
            assert page.post is post
            assert page.previous == (posts[i - 1].meta if i > 0 else None)
            assert page.next == (posts[i + 1].meta if i + 1 < len(posts) else None)


def test_normalize_route():
    assert normalize_route("/blog/a/") == "/blog/a"
    assert normalize_route("/blog/a") == "/blog/a"
    assert normalize_route("/") == "/"


class TestBuildFeed:

    def test_newest_first(self, sample_index):
        feed = build_feed(sample_index)
        assert feed == list(reversed(sample_index.posts))

    def test_hidden_posts_included_by_default(self):
        index = ContentIndex.from_posts((make_post("Shown", 1), make_post("Hidden", 2, show_in_feed=False)))
        assert [p.meta.title for p in build_feed(index)] == ["Hidden", "Shown"]

    def test_hidden_posts_filtered_when_requested(self):
        index = ContentIndex.from_posts((make_post("Shown", 1), make_post("Hidden", 2, show_in_feed=False)))
        feed = build_feed(index, respect_show_in_feed=True)
        assert [p.meta.title for p in feed] == ["Shown"]

    def test_empty_index(self):
        assert build_feed(ContentIndex()) == []

    def test_feed_does_not_touch_index(self, sample_index):
        feed = build_feed(sample_index)
        feed.clear()
        assert len(sample_index) == 3
