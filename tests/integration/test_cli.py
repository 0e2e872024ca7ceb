"""Integration tests for the command-line interface."""

import json

import pytest
import matplotlib.pyplot as plt

from atmo_scatter.cli import main


class TestCli:
    """Tests for rendering frames from the command line."""

    def test_renders_png(self, tmp_path):
        output = tmp_path / "frame.png"
        code = main(["--width", "24", "--height", "16", "--no-dither", "--output", str(output)])
        assert code == 0
        image = plt.imread(str(output))
        assert image.shape[:2] == (16, 24)

    def test_config_file_with_overrides(self, tmp_path):
        config_path = tmp_path / "scene.json"
        config_path.write_text(json.dumps({
            "render": {"width": 8, "height": 8, "output_path": str(tmp_path / "unused.png")},
        }))
        output = tmp_path / "inside.png"
        code = main([
            "--config", str(config_path),
            "--camera-distance", "70",
            "--sun", "-400", "0", "0",
            "--background", "0", "0", "0.05",
            "--output", str(output),
        ])
        assert code == 0
        assert output.exists()
        assert not (tmp_path / "unused.png").exists()

    def test_invalid_config_returns_error(self, tmp_path):
        config_path = tmp_path / "scene.yaml"
        config_path.write_text("atmosphere:\n  planet_radius: 90\n")
        assert main(["--config", str(config_path), "--output", str(tmp_path / "x.png")]) == 1

    def test_unsupported_config_format(self, tmp_path):
        config_path = tmp_path / "scene.ini"
        config_path.write_text("")
        assert main(["--config", str(config_path)]) == 1

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as info:
            main(["--version"])
        assert info.value.code == 0
        assert "atmo-scatter" in capsys.readouterr().out
