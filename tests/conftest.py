import io

import pytest
from PIL import Image


@pytest.fixture
def png_data():
    """A real 5x5 red PNG image (IHDR, IDAT, IEND)."""
    image = Image.new('RGB', (5, 5), 'red')
    buffer = io.BytesIO()
    image.save(buffer, format='PNG')

    return buffer.getvalue()


@pytest.fixture
def png_path(tmp_path, png_data):
    path = tmp_path / 'red.png'
    path.write_bytes(png_data)

    return path
