#!/usr/bin/env python3
"""批量转码演示脚本。

展示 py_image_transcode_mcp 库的核心功能：
- 多格式批量缩放保存
- 默认输出命名
- 失败中止与错误信息
- MCP 工具响应
"""

import shutil
import tempfile
from pathlib import Path

from PIL import Image, ImageDraw

from py_image_transcode_mcp import (
    BatchAbortedError,
    ConfigError,
    ImageTranscoder,
    probe_image,
    save_images,
)
from py_image_transcode_mcp.mcp_server import run_check_file_exists, run_save_images


def create_sample_images(images_dir: Path) -> list[Path]:
    """生成演示用素材图片"""
    images_dir.mkdir(parents=True, exist_ok=True)

    photo = images_dir / "landscape.jpg"
    Image.merge(
        "RGB",
        (
            Image.linear_gradient("L").resize((800, 600)),
            Image.radial_gradient("L").resize((800, 600)),
            Image.effect_noise((800, 600), 40),
        ),
    ).save(photo, "JPEG", quality=92)

    logo = images_dir / "logo.png"
    logo_img = Image.new("RGBA", (400, 400), (0, 0, 0, 0))
    ImageDraw.Draw(logo_img).ellipse([40, 40, 360, 360], fill=(30, 144, 255, 200))
    logo_img.save(logo, "PNG")

    print(f"📁 素材目录: {images_dir}")
    for path in (photo, logo):
        metadata = probe_image(path)
        print(f"  - {path.name}: {metadata.width}x{metadata.height}, {metadata.get_file_size_human()}")
    return [photo, logo]


def demo_batch_save(images: list[Path], output_dir: Path):
    """多格式批量保存演示"""
    print("\n=== 批量保存 ===")
    photo, logo = images

    jobs = [
        {
            "source_path": str(photo),
            "destination_path": str(output_dir / "landscape_400x300.webp"),
            "target_width": 400,
            "target_height": 300,
            "output_format": "webp",
            "quality": 80,
        },
        {
            "source_path": str(logo),
            "destination_path": str(output_dir / "logo_lossless.webp"),
            "target_width": 128,
            "target_height": 128,
            "output_format": "webp",
            "quality": 100,
        },
        {
            "source_path": str(logo),
            "destination_path": str(output_dir / "logo_flat.jpg"),
            "target_width": 128,
            "target_height": 128,
            "output_format": "jpeg",
            "quality": 90,
        },
    ]

    result = save_images(jobs)
    print(f"✅ {result.get_summary()}")
    for job in jobs:
        metadata = probe_image(job["destination_path"])
        print(f"  - {Path(job['destination_path']).name}: {metadata.get_file_size_human()}")


def demo_default_naming(images: list[Path], output_dir: Path):
    """未指定输出路径时的默认命名"""
    print("\n=== 默认命名 ===")
    transcoder = ImageTranscoder(target_dir=output_dir / "named")
    result = transcoder.save_images(
        [{"path": str(path), "target_width": 64, "target_height": 48} for path in images]
    )
    print(f"✅ {result.get_summary()}")
    for path in sorted((output_dir / "named").iterdir()):
        print(f"  - {path.name}")


def demo_failures(images: list[Path], output_dir: Path):
    """失败中止演示"""
    print("\n=== 错误处理 ===")
    photo = images[0]

    try:
        save_images(
            [
                {
                    "source_path": str(photo),
                    "destination_path": str(output_dir / "bad.png"),
                    "target_width": 0,
                    "target_height": 10,
                }
            ]
        )
    except ConfigError as e:
        print(f"⚠️ 配置错误: {e}")

    try:
        save_images(
            [
                {
                    "source_path": str(photo),
                    "destination_path": str(output_dir / "first.png"),
                    "target_width": 32,
                    "target_height": 32,
                },
                {
                    "source_path": str(photo.with_name("missing.jpg")),
                    "destination_path": str(output_dir / "second.png"),
                    "target_width": 32,
                    "target_height": 32,
                },
            ]
        )
    except BatchAbortedError as e:
        print(f"⚠️ 第 {e.job_index} 项中止，已保存 {e.saved_count} 张: {e}")


def demo_mcp_responses(images: list[Path], output_dir: Path):
    """MCP 工具响应演示"""
    print("\n=== MCP 响应 ===")
    destination = output_dir / "mcp" / "thumb.png"
    print(run_check_file_exists(str(destination)))
    print(
        run_save_images(
            [
                {
                    "source_path": str(images[1]),
                    "destination_path": str(destination),
                    "target_width": 32,
                    "target_height": 32,
                    "output_format": "png",
                }
            ]
        )
    )
    print(run_check_file_exists(str(destination)))


def main():
    work_dir = Path(tempfile.mkdtemp(prefix="transcode_demo_"))
    try:
        images = create_sample_images(work_dir / "images")
        output_dir = work_dir / "output"
        demo_batch_save(images, output_dir)
        demo_default_naming(images, output_dir)
        demo_failures(images, output_dir)
        demo_mcp_responses(images, output_dir)
    finally:
        shutil.rmtree(work_dir, ignore_errors=True)


if __name__ == "__main__":
    main()
