import numpy as np
import pytest
from PIL import Image

from glyphmatch.cli import main
from tests.conftest import FONT_PATH, needs_font


@pytest.fixture
def image_path(tmp_path):
    rng = np.random.default_rng(5)
    path = tmp_path / "input.png"
    Image.fromarray(rng.integers(0, 256, size=(60, 90), dtype=np.uint8)).save(path)
    return path


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config-home"))


@needs_font
@pytest.mark.parametrize("algorithm", ["sed", "md", "mi:bins=8", "pca:nf=6"])
def test_writes_output_file(tmp_path, image_path, algorithm):
    output = tmp_path / "out.txt"
    main([str(image_path), "-f", FONT_PATH, "--font-size", "10", "-c", "12", "-r", "8", "-a", algorithm, "-o", str(output)])
    lines = output.read_text(encoding="utf-8").splitlines()
    assert 0 < len(lines) <= 8
    assert all(len(line) == len(lines[0]) for line in lines)
    assert len(lines[0]) <= 12


@needs_font
def test_sequential_and_parallel_agree(tmp_path, image_path):
    outputs = []
    for threads in ["1", "3"]:
        output = tmp_path / f"out{threads}.txt"
        main([str(image_path), "-f", FONT_PATH, "-a", "sed", "--threads", threads, "-c", "10", "-o", str(output)])
        outputs.append(output.read_text(encoding="utf-8"))
    assert outputs[0] == outputs[1]


@needs_font
def test_prints_to_stdout(image_path, capsys):
    main([str(image_path), "-f", FONT_PATH, "--charset", "texture", "-a", "md", "-c", "5", "-r", "5"])
    out = capsys.readouterr().out
    assert out.strip("\n")
    assert set(out) <= set(" .,:;!'-/\\xX*+=#@\n")


@needs_font
def test_unknown_algorithm(image_path, capsys):
    with pytest.raises(SystemExit) as exc:
        main([str(image_path), "-f", FONT_PATH, "-a", "xyz"])
    assert exc.value.code == 1
    assert "xyz" in capsys.readouterr().err


@needs_font
def test_config_file_supplies_defaults(tmp_path, image_path, capsys):
    config = tmp_path / "custom.ini"
    config.write_text("[glyphmatch]\nalgorithm = bogus\n")
    with pytest.raises(SystemExit):
        main([str(image_path), "-f", FONT_PATH, "--config", str(config)])
    assert "bogus" in capsys.readouterr().err


def test_missing_image(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc:
        main([str(tmp_path / "nope.png"), "-f", str(tmp_path / "font.ttf")])
    assert exc.value.code == 1
    assert "File not found" in capsys.readouterr().err


def test_missing_font(image_path, tmp_path, capsys):
    with pytest.raises(SystemExit) as exc:
        main([str(image_path), "-f", str(tmp_path / "font.ttf")])
    assert exc.value.code == 1
    assert "Font not found" in capsys.readouterr().err
