"""
Tests for headless preview URL building.
"""
from types import SimpleNamespace

from django.test import SimpleTestCase, override_settings

from lucis_cms.preview import build_preview_url, get_preview_pathname


ROUTES = {
    'pages.dynamicpage': '/lp/{url}',
    'blog.article': '/blog/{slug}',
}


class GetPreviewPathnameTest(SimpleTestCase):

    def test_dynamic_page_uses_url(self):
        path = get_preview_pathname('pages.dynamicpage', {'url': 'summer-sale'}, 'draft', 's3cret', ROUTES)
        self.assertEqual(path, '/lp/summer-sale?status=draft&secret=s3cret')

    def test_article_uses_slug(self):
        document = SimpleNamespace(slug='light-therapy-101')
        path = get_preview_pathname('blog.article', document, 'published', 's3cret', ROUTES)
        self.assertEqual(path, '/blog/light-therapy-101?status=published&secret=s3cret')

    def test_label_is_case_insensitive(self):
        path = get_preview_pathname('Blog.Article', {'slug': 'a'}, 'draft', 'x', ROUTES)
        self.assertTrue(path.startswith('/blog/a?'))

    def test_unknown_content_type(self):
        self.assertIsNone(get_preview_pathname('influencers.influencer', {'slug': 'a'}, 'draft', 'x', ROUTES))

    def test_query_values_are_encoded(self):
        path = get_preview_pathname('blog.article', {'slug': 'a'}, 'draft', 'a&b', ROUTES)
        self.assertEqual(path, '/blog/a?status=draft&secret=a%26b')


@override_settings(CLIENT_URL='https://lucis.life/', PREVIEW_SECRET='s3cret', PREVIEW_ROUTES=ROUTES)
class BuildPreviewUrlTest(SimpleTestCase):

    def test_absolute_url(self):
        url = build_preview_url('blog.article', {'slug': 'a'})
        self.assertEqual(url, 'https://lucis.life/blog/a?status=draft&secret=s3cret')

    def test_no_route(self):
        self.assertIsNone(build_preview_url('influencers.influencer', {'slug': 'a'}))
