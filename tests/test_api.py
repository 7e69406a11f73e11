"""
Tests for the high-level API.
"""

import zipfile

import pytest
from PIL import UnidentifiedImageError

from templatequill import fill_template, __version__
from tests.docx_factory import paragraph


@pytest.mark.integration
class TestFillTemplate:
    """Test fill_template convenience function."""

    def test_fill_values_and_images(self, make_template, make_image, temp_dir, working_dir):
        template = make_template(
            paragraph('${name}') + paragraph('${logo}'),
            headers=[paragraph('${name}')],
        )
        image = make_image()
        output = temp_dir / "filled.docx"

        result = fill_template(
            template,
            {"name": "Jan"},
            output,
            images={"logo": ("logo.png", image)},
        )

        assert result == output
        with zipfile.ZipFile(output) as zf:
            document = zf.read('word/document.xml').decode('utf-8')
            assert paragraph('Jan') in document
            assert 'r:embed="rId1000"' in document
            assert paragraph('Jan') in zf.read('word/header1.xml').decode('utf-8')
            assert 'word/media/logo.png' in zf.namelist()
        assert list(working_dir.iterdir()) == []

    def test_working_copy_removed_on_error(self, make_template, temp_dir, working_dir):
        """Test that a failing call does not leave the working copy behind."""
        template = make_template(paragraph('${logo}'))
        not_an_image = temp_dir / "logo.png"
        not_an_image.write_text("not an image")
        output = temp_dir / "never.docx"

        with pytest.raises(UnidentifiedImageError):
            fill_template(template, {}, output, images={"logo": ("logo.png", not_an_image)})
        assert not output.exists()
        assert list(working_dir.iterdir()) == []


def test_version():
    assert __version__.count('.') == 2
