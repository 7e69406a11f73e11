"""
Tests for content type registration of injected media.
"""

from templatequill.package.content_types import ensure_default_content_type, media_content_type
from tests.docx_factory import CONTENT_TYPES_XML


class TestEnsureDefaultContentType:

    def test_adds_missing_extension(self):
        original = CONTENT_TYPES_XML.encode('utf-8')
        result = ensure_default_content_type(original, '.png')
        assert b'<Default Extension="png" ContentType="image/png"/></Types>' in result
        assert result.startswith(original[:original.rindex(b'</Types>')])

    def test_existing_extension_unchanged(self):
        original = CONTENT_TYPES_XML.replace(
            '</Types>', '<Default Extension="PNG" ContentType="image/png"/></Types>'
        ).encode('utf-8')
        assert ensure_default_content_type(original, 'png') is original

    def test_unknown_extension_unchanged(self):
        original = CONTENT_TYPES_XML.encode('utf-8')
        assert ensure_default_content_type(original, 'xyz') is original

    def test_media_content_type(self):
        assert media_content_type('.JPG') == 'image/jpeg'
        assert media_content_type('svgz') is None
