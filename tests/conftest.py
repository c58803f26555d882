"""测试配置文件。

提供测试所需的fixtures和配置。
"""

import tempfile
from pathlib import Path

import pytest
from PIL import Image, ImageDraw

from py_image_transcode_mcp.config import reset_config


def make_photo_image(size: tuple[int, int] = (320, 240)) -> Image.Image:
    """生成带噪声的照片类图像，压缩表现接近真实照片"""
    red = Image.linear_gradient("L").resize(size)
    green = Image.radial_gradient("L").resize(size)
    blue = Image.effect_noise(size, 48)
    return Image.merge("RGB", (red, green, blue))


def _create_test_images(images_dir: Path) -> dict[str, Path]:
    """在临时目录中创建各类测试图片"""
    images: dict[str, Path] = {}

    photo_path = images_dir / "photo.png"
    make_photo_image().save(photo_path, "PNG")
    images["photo"] = photo_path

    jpeg_path = images_dir / "photo.jpg"
    make_photo_image((400, 300)).save(jpeg_path, "JPEG", quality=90)
    images["jpeg"] = jpeg_path

    transparent_path = images_dir / "transparent.png"
    transparent_img = Image.new("RGBA", (200, 200), color=(0, 0, 0, 0))
    draw = ImageDraw.Draw(transparent_img)
    for i in range(5):
        x, y = i * 30, i * 30
        draw.ellipse(
            [x, y, x + 60, y + 60],
            fill=(255 - i * 40, 100 + i * 20, i * 50, 120 + i * 25),
        )
    transparent_img.save(transparent_path, "PNG")
    images["transparent"] = transparent_path

    palette_path = images_dir / "palette.gif"
    palette_img = Image.new("P", (64, 48), color=1)
    palette_img.putpalette([0, 0, 0, 255, 0, 0] + [0, 0, 255] * 254)
    # 左半边使用透明色索引 0，保存时调色板优化不会丢掉透明信息
    palette_img.paste(0, (0, 0, 32, 48))
    palette_img.save(palette_path, "GIF", transparency=0)
    images["palette"] = palette_path

    gray16_path = images_dir / "gray16.png"
    Image.new("I;16", (40, 30), 30000).save(gray16_path, "PNG")
    images["gray16"] = gray16_path

    rotated_path = images_dir / "rotated.jpg"
    exif = Image.Exif()
    exif[0x0112] = 6  # Orientation: 顺时针旋转 90 度
    Image.new("RGB", (120, 60), color="green").save(rotated_path, "JPEG", exif=exif)
    images["rotated"] = rotated_path

    corrupt_path = images_dir / "corrupt.png"
    corrupt_path.write_bytes(b"\x89PNG\r\n\x1a\n not really a png")
    images["corrupt"] = corrupt_path

    return images


@pytest.fixture
def temp_dir():
    """临时目录fixture"""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def sample_images(temp_dir: Path) -> dict[str, Path]:
    """生成的素材图片"""
    images_dir = temp_dir / "images"
    images_dir.mkdir()
    return _create_test_images(images_dir)


@pytest.fixture
def output_dir(temp_dir: Path) -> Path:
    """输出目录fixture，不预先创建"""
    return temp_dir / "output"


@pytest.fixture
def make_job(output_dir: Path):
    """创建任务描述的工厂，提供默认值"""

    def _make_job(source_path: Path, name: str, **kwargs) -> dict:
        descriptor = {
            "source_path": str(source_path),
            "destination_path": str(output_dir / name),
            "target_width": 160,
            "target_height": 90,
            "output_format": "keep_original",
            "quality": 75,
        }
        descriptor.update(kwargs)
        return descriptor

    return _make_job


@pytest.fixture(autouse=True)
def fresh_config():
    """每个测试前后重置全局配置"""
    reset_config()
    yield
    reset_config()
