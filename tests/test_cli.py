"""
Tests for the tonesight command line interface.
"""

import json

import cv2
import pytest
import numpy as np
from click.testing import CliRunner

from tonesight.cli import main
from tonesight.io import load_image, save_image, find_images
from tonesight.exceptions import ImageIOError
from tonesight.processing.tone import list_presets


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def dark_image(tmp_path):
    """Dark gradient PNG on disk"""
    image = np.zeros((40, 60, 3), dtype=np.uint8)
    image[:] = np.linspace(10, 120, 60, dtype=np.uint8)[np.newaxis, :, np.newaxis]
    path = tmp_path / "dark.png"
    cv2.imwrite(str(path), image)
    return path


class TestImageIO:
    """Test image loading, saving and discovery."""

    def test_round_trip_png(self, tmp_path):
        """PNG output reloads bit-exact."""
        image = np.random.default_rng(3).integers(0, 256, (8, 9, 3), dtype=np.uint8)

        path = save_image(image, tmp_path / "nested" / "out.png")

        np.testing.assert_array_equal(load_image(path), image)

    def test_load_missing(self, tmp_path):
        """Missing files raise ImageIOError."""
        with pytest.raises(ImageIOError):
            load_image(tmp_path / "missing.jpg")

    def test_load_corrupt(self, tmp_path):
        """Undecodable files raise ImageIOError."""
        path = tmp_path / "corrupt.jpg"
        path.write_bytes(b"not an image")

        with pytest.raises(ImageIOError):
            load_image(path)

    def test_save_unsupported_extension(self, tmp_path):
        """Extensions without an OpenCV writer raise ImageIOError."""
        image = np.zeros((4, 4, 3), dtype=np.uint8)

        with pytest.raises(ImageIOError):
            save_image(image, tmp_path / "out.xyz")

    def test_save_under_a_file_fails(self, tmp_path):
        """An output directory that cannot be created raises ImageIOError."""
        blocker = tmp_path / "blocker"
        blocker.write_bytes(b"")

        with pytest.raises(ImageIOError):
            save_image(np.zeros((4, 4, 3), dtype=np.uint8), blocker / "out.png")

    def test_find_images(self, tmp_path):
        """Discovery filters by extension, sorts and optionally recurses."""
        (tmp_path / "sub").mkdir()
        for name in ["b.JPG", "a.png", "notes.txt", "sub/c.jpg"]:
            (tmp_path / name).write_bytes(b"")

        assert [p.name for p in find_images(tmp_path)] == ["a.png", "b.JPG"]
        assert [p.name for p in find_images(tmp_path, recursive=True)] == ["a.png", "b.JPG", "c.jpg"]
        assert find_images(tmp_path / "notes.txt") == []


class TestCLI:
    """Test CLI commands."""

    def test_presets_command(self, runner):
        """presets lists every preset name."""
        result = runner.invoke(main, ['presets'])

        assert result.exit_code == 0
        for name in list_presets():
            assert name in result.output

    def test_correct(self, runner, dark_image, tmp_path):
        """correct writes a brighter image and reports the settings."""
        output = tmp_path / "out" / "corrected.png"

        result = runner.invoke(main, ['correct', str(dark_image), str(output), '-s', '0.7',
                                      '--highlights', '0'])

        assert result.exit_code == 0, result.output
        assert "Shadow Amount: 70%" in result.output
        corrected = load_image(output)
        assert corrected.shape == (40, 60, 3)
        assert corrected.mean() > load_image(dark_image).mean()

    def test_correct_with_preset_quiet(self, runner, dark_image, tmp_path):
        """--quiet suppresses the settings report."""
        output = tmp_path / "preset.png"

        result = runner.invoke(main, ['-q', 'correct', str(dark_image), str(output), '-p', 'optimal'])

        assert result.exit_code == 0, result.output
        assert "Shadow Amount" not in result.output
        assert output.exists()

    def test_correct_corrupt_input(self, runner, tmp_path):
        """A corrupt input exits with status 1."""
        bad = tmp_path / "bad.jpg"
        bad.write_bytes(b"garbage")

        result = runner.invoke(main, ['correct', str(bad), str(tmp_path / "x.jpg")])

        assert result.exit_code == 1

    def test_correct_unsupported_output_format(self, runner, dark_image, tmp_path):
        """An unwritable output format exits cleanly with status 1."""
        result = runner.invoke(main, ['correct', str(dark_image), str(tmp_path / "out.xyz")])

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "Error correcting" in result.output

    def test_correct_rejects_empty_config_value(self, runner, dark_image, tmp_path):
        """An empty config value exits cleanly and names the key."""
        config = tmp_path / "config.yaml"
        config.write_text("tone:\n  shadow_amount:\n")

        result = runner.invoke(main, ['-c', str(config), 'correct', str(dark_image),
                                      str(tmp_path / "cfg.png")])

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "shadow_amount" in result.output

    def test_correct_uses_config_file(self, runner, dark_image, tmp_path):
        """Parameters are read from the --config file."""
        config = tmp_path / "config.yaml"
        config.write_text("tone:\n  shadow_amount: 0.9\n")

        result = runner.invoke(main, ['-c', str(config), 'correct', str(dark_image),
                                      str(tmp_path / "cfg.png")])

        assert result.exit_code == 0, result.output
        assert "Shadow Amount: 90%" in result.output

    def test_compare(self, runner, dark_image, tmp_path):
        """compare writes every preset, the mosaic and the JSON report."""
        out_dir = tmp_path / "compare"
        config = tmp_path / "config.yaml"
        config.write_text(
            "analysis:\n  sample_points: [[5, 5], [500, 500]]\n"
            "mosaic:\n  tile_width: 60\n  tile_height: 40\n  columns: 3\n"
        )

        result = runner.invoke(main, ['-c', str(config), 'compare', str(dark_image), str(out_dir),
                                      '--json-report'])

        assert result.exit_code == 0, result.output
        for name in list_presets():
            assert (out_dir / f"result_{name}.jpg").exists()

        mosaic = load_image(out_dir / "comparison.jpg")
        assert mosaic.shape == (80, 180, 3)

        report = json.loads((out_dir / "pixel_report.json").read_text())
        assert set(report) == set(list_presets())
        assert [(p['x'], p['y']) for p in report['shadows_50']] == [(5, 5)]
        assert report['shadows_50'][0]['brightness_change'] > 0

    def test_batch(self, runner, dark_image, tmp_path):
        """batch mirrors the input tree with suffixed names."""
        in_dir = tmp_path / "in"
        (in_dir / "nested").mkdir(parents=True)
        image = load_image(dark_image)
        save_image(image, in_dir / "one.png")
        save_image(image, in_dir / "nested" / "two.png")
        out_dir = tmp_path / "batch_out"

        result = runner.invoke(main, ['batch', str(in_dir), str(out_dir), '--recursive'])

        assert result.exit_code == 0, result.output
        assert (out_dir / "one_sh.png").exists()
        assert (out_dir / "nested" / "two_sh.png").exists()
        assert "CORRECTION SUMMARY" in result.output

    def test_batch_reports_failures(self, runner, dark_image, tmp_path):
        """A failed file is reported without stopping the batch."""
        in_dir = tmp_path / "in"
        in_dir.mkdir()
        save_image(load_image(dark_image), in_dir / "good.png")
        (in_dir / "broken.jpg").write_bytes(b"garbage")
        out_dir = tmp_path / "batch_out"

        result = runner.invoke(main, ['batch', str(in_dir), str(out_dir)])

        assert result.exit_code == 1
        assert (out_dir / "good_sh.png").exists()
        assert "broken.jpg" in result.output

    def test_batch_empty_directory(self, runner, tmp_path):
        """An empty input directory exits with status 1."""
        in_dir = tmp_path / "empty"
        in_dir.mkdir()

        result = runner.invoke(main, ['batch', str(in_dir), str(tmp_path / "out")])

        assert result.exit_code == 1
