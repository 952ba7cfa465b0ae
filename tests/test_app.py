# =============================================================================
# Command Line Tests
# =============================================================================

from himalaya_config.app import main


def test_writes_files(declaration_file, tmp_path, capsys):
    output_dir = tmp_path / "out"

    code = main(["--input", str(declaration_file), "--output-dir", str(output_dir)])

    assert code == 0
    assert (output_dir / "himalaya" / "config.toml").exists()
    assert (output_dir / "systemd" / "user" / "himalaya-watch.service").exists()
    assert "Wrote" in capsys.readouterr().out


def test_dry_run_prints_and_writes_nothing(declaration_file, tmp_path, capsys):
    output_dir = tmp_path / "out"

    code = main([
        "--input", str(declaration_file),
        "--output-dir", str(output_dir),
        "--dry-run",
    ])

    out = capsys.readouterr().out
    assert code == 0
    assert "[personal]" in out
    assert "ExecStart=/usr/bin/himalaya envelopes watch --account personal" in out
    assert not output_dir.exists()


def test_missing_declaration(tmp_path, capsys):
    code = main(["--input", str(tmp_path / "missing.toml")])

    assert code == 1
    assert "Config error" in capsys.readouterr().err


def test_paths(tmp_path, capsys):
    code = main(["--paths", "--output-dir", str(tmp_path)])

    out = capsys.readouterr().out
    assert code == 0
    assert str(tmp_path / "himalaya" / "config.toml") in out
