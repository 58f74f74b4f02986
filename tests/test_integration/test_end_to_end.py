"""
Integration tests for end-to-end workflows.
"""

import re
from unittest.mock import patch

import pytest
from PIL import Image

from mediashrink.core.config import CompressionConfig
from mediashrink.core.errors import EncoderNotAvailableError, NotFoundError
from mediashrink.core.ffmpeg_executor import FFmpegExecutor
from mediashrink.core.media_compressor import MediaCompressor
from mediashrink.core.scanner import scan_tree
from tests.test_utils.fixtures import create_test_image_file, create_test_video_file
from tests.test_utils.mocks import fake_ffmpeg_run


@pytest.mark.integration
class TestEndToEnd:
    """Integration tests for complete workflows."""

    @patch("mediashrink.core.ffmpeg_executor.subprocess.run")
    def test_folder_scenario(self, mock_run, source_dir, output_dir):
        """a.png + b.mp4 + c.txt: two files compressed, text file ignored."""

        def _fake_process(cmd, **kwargs):
            fake_ffmpeg_run(video_size=250_000)(cmd[1:])
            return type("Completed", (), {"returncode": 0})()

        mock_run.side_effect = _fake_process
        image = create_test_image_file(source_dir, "a.png", (64, 48))
        create_test_video_file(source_dir, "b.mp4", 1_000_000)
        (source_dir / "c.txt").write_bytes(b"t" * 500)

        descriptors = scan_tree(source_dir)
        assert [d.relative_name for d in descriptors] == ["a.png", "b.mp4"]

        config = CompressionConfig(output_dir=output_dir, convert_images=True, generate_poster=False)
        result = MediaCompressor(config, ffmpeg_executor=FFmpegExecutor("/fake/ffmpeg")).compress_tree(source_dir)

        assert result.file_count == 2
        assert result.total_original == image.stat().st_size + 1_000_000
        assert result.output_path.parent == output_dir
        assert re.fullmatch(r"album-\d{1,6}", result.output_path.name)

        suffix = result.output_path.name.split("-", 1)[1]
        names = sorted(p.name for p in result.output_path.iterdir())
        assert names == [f"a-{suffix}.webp", f"b-{suffix}.mp4"]
        assert result.total_compressed == (result.output_path / f"a-{suffix}.webp").stat().st_size + 250_000

        with Image.open(result.output_path / f"a-{suffix}.webp") as img:
            assert img.size == (64, 48)

    def test_encoder_unavailable_single_vs_batch(self, source_dir, output_dir):
        """Single-file jobs raise; folder jobs copy the video verbatim."""
        video = create_test_video_file(source_dir, "clip.mp4", 4096)
        config = CompressionConfig(output_dir=output_dir)

        with patch("mediashrink.core.ffmpeg_executor.FFmpegExecutor.find_ffmpeg", return_value=None):
            with pytest.raises(EncoderNotAvailableError):
                MediaCompressor(config).compress_file(video)

            events = []
            result = MediaCompressor(config).compress_tree(source_dir, progress=events.append)

        (copied,) = list(result.output_path.iterdir())
        assert copied.read_bytes() == video.read_bytes()
        assert result.total_original == result.total_compressed == 4096
        assert len(events) == 1
        assert events[0].original_size == events[0].resulting_size == 4096
        assert result.fallbacks[0].descriptor.relative_name == "clip.mp4"

    def test_missing_file_touches_nothing(self, temp_dir, output_dir):
        with pytest.raises(NotFoundError):
            MediaCompressor(CompressionConfig(output_dir=output_dir)).compress_file(temp_dir / "ghost.png")

        assert not output_dir.exists()

    def test_mixed_batch_with_failures(self, source_dir, output_dir):
        """Progress is contiguous and totals add up even when some files fall back."""
        create_test_image_file(source_dir, "1.jpg")
        (source_dir / "2.png").write_bytes(b"corrupt")
        create_test_video_file(source_dir, "3.mp4", 900)
        create_test_video_file(source_dir, "nested/4_bad.mov", 800)
        create_test_image_file(source_dir, "nested/5.gif")

        executor = FFmpegExecutor("/fake/ffmpeg")
        events = []
        with patch.object(executor, "run", side_effect=fake_ffmpeg_run(video_size=300, fail_keyword="4_bad.mov")):
            result = MediaCompressor(
                CompressionConfig(output_dir=output_dir, generate_poster=True), ffmpeg_executor=executor
            ).compress_tree(source_dir, progress=events.append)

        assert [e.current for e in events] == [1, 2, 3, 4, 5]
        assert result.total_original == sum(e.original_size for e in events)
        assert result.total_compressed == sum(e.resulting_size for e in events)
        assert sorted(o.descriptor.relative_name for o in result.fallbacks) == ["2.png", "nested/4_bad.mov"]
        posters = list(result.output_path.glob("*-poster.webp"))
        assert len(posters) == 1
        assert not list(result.output_path.rglob("*-poster.jpg"))
