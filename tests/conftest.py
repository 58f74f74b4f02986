"""
Shared pytest fixtures and configuration.
"""

import shutil
import tempfile
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from mediashrink.core.config import CompressionConfig
from mediashrink.core.ffmpeg_executor import FFmpegExecutor
from tests.test_utils.fixtures import create_test_image_file
from tests.test_utils.mocks import fake_ffmpeg_run


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    # Cleanup
    if temp_path.exists():
        shutil.rmtree(temp_path)


@pytest.fixture
def source_dir(temp_dir):
    """Empty input folder inside the temp directory."""
    path = temp_dir / "album"
    path.mkdir()
    return path


@pytest.fixture
def output_dir(temp_dir):
    """Output location inside the temp directory (not created yet)."""
    return temp_dir / "out"


@pytest.fixture
def sample_image_png(temp_dir):
    """A real, decodable 16x12 PNG."""
    return create_test_image_file(temp_dir, "test_image.png", (16, 12))


@pytest.fixture
def sample_video(temp_dir):
    """A placeholder video file; FFmpeg is always mocked."""
    video_path = temp_dir / "test_video.mp4"
    video_path.write_bytes(b"0" * 2048)
    return video_path


@pytest.fixture
def mock_ffmpeg_executor():
    """A mocked FFmpegExecutor whose run() writes plausible outputs."""
    mock_executor = MagicMock(spec=FFmpegExecutor)
    mock_executor.ffmpeg_path = "/fake/path/to/ffmpeg"
    mock_executor.run = MagicMock(side_effect=fake_ffmpeg_run())
    return mock_executor


@pytest.fixture
def mock_config(output_dir):
    """Default configuration writing into output_dir."""
    return CompressionConfig(output_dir=output_dir, ffmpeg_path="/fake/path/to/ffmpeg")
