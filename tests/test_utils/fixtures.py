"""
Test data and file fixtures.
"""

from pathlib import Path
from typing import List, Tuple

from PIL import Image


def create_test_video_file(directory: Path, name: str = "test_video.mp4", size: int = 1024) -> Path:
    """Create a placeholder video file with specified size."""
    video_path = directory / name
    video_path.parent.mkdir(parents=True, exist_ok=True)
    with open(video_path, "wb") as f:
        f.write(b"0" * size)
    return video_path


def create_test_image_file(directory: Path, name: str = "test_image.png", dimensions: Tuple[int, int] = (16, 12)) -> Path:
    """Create a real image; the format is picked from the file extension."""
    image_path = directory / name
    image_path.parent.mkdir(parents=True, exist_ok=True)
    image = Image.new("RGB", dimensions, (20, 120, 220))
    for x in range(dimensions[0]):
        image.putpixel((x, x % dimensions[1]), (255, 255, 0))
    image.save(image_path)
    return image_path


def create_test_directory_structure(base_dir: Path, structure: List[str]) -> None:
    """Create a directory structure for testing.

    Args:
        base_dir: Base directory to create structure in
        structure: List of relative paths (files or directories)
    """
    for item in structure:
        path = base_dir / item
        if item.endswith("/"):
            # It's a directory
            path.mkdir(parents=True, exist_ok=True)
        else:
            # It's a file
            path.parent.mkdir(parents=True, exist_ok=True)
            path.touch()
