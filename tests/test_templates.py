import pytest

from md_blog_server.content.models import PostPage
from md_blog_server.rendering.templates import PageRenderer, RenderTemplateError

from conftest import make_post


def test_post_page_contains_body_and_navigation():
    first, second, third = make_post("First", 1), make_post("Second", 2), make_post("Third", 3)
    page = PostPage(post=second, previous=first.meta, next=third.meta)

    html = PageRenderer(site_title="My Blog").render_post(page)

    assert "<p>Second</p>" in html
    assert 'href="/blog/first"' in html
    assert 'href="/blog/third"' in html
    assert "My Blog" in html
    assert "January 02, 2023" in html

def test_titles_are_escaped_but_body_is_not():
    post = make_post("<script>x</script>", 1, path="/blog/x")
    html = PageRenderer().render_post(PostPage(post=post))

    assert "&lt;script&gt;x&lt;/script&gt;" in html
    assert "<p><script>x</script></p>" in html

def test_feed_lists_posts_in_given_order():
    posts = [make_post("Newer", 2), make_post("Older", 1)]
    html = PageRenderer().render_feed(posts)
    assert html.index("Newer") < html.index("Older")

def test_hrefs_are_percent_encoded():
    sharp = make_post("Sharp", 1, path="/blog/c#sharp")
    spaced = make_post("Spaced", 3, path="/blog/two words")
    page = PostPage(post=make_post("Middle", 2), previous=sharp.meta, next=spaced.meta)

    html = PageRenderer().render_post(page)
    feed = PageRenderer().render_feed([spaced, sharp])

    for rendered in (html, feed):
        assert 'href="/blog/c%23sharp"' in rendered
        assert 'href="/blog/two%20words"' in rendered

def test_empty_feed():
    assert "Nothing published yet." in PageRenderer().render_feed([])

def test_broken_template_raises_render_error(tmp_path):
    (tmp_path / "post.html").write_text("{% for %}", encoding="utf-8")
    renderer = PageRenderer(templates_dir=tmp_path)

    with pytest.raises(RenderTemplateError):
        renderer.render_post(PostPage(post=make_post("A", 1)))

def test_missing_template_raises_render_error(tmp_path):
    with pytest.raises(RenderTemplateError):
        PageRenderer(templates_dir=tmp_path).render_feed([])
