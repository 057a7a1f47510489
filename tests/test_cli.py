import gzip

from click.testing import CliRunner

from diago.cli import main
from tests.utils import ProfileBuilder


def write_profile(tmp_path):
    builder = ProfileBuilder()
    builder.stack(["main", "serve"], 2_000_000)
    builder.stack(["main", "render"], 1_000_000)
    path = tmp_path / "cpu.pprof"
    path.write_bytes(gzip.compress(builder.build().SerializeToString()))
    return str(path)


def test_prints_tree(tmp_path):
    result = CliRunner().invoke(main, [write_profile(tmp_path)])

    assert result.exit_code == 0, result.output
    assert "3.00ms" in result.output
    assert "serve" in result.output
    assert "render" in result.output


def test_filter_from_environment(tmp_path):
    result = CliRunner().invoke(main, [write_profile(tmp_path)], env={"DIAGO_FILTER": "SERVE"})

    assert result.exit_code == 0, result.output
    assert "serve" in result.output
    assert "render" not in result.output


def test_mode_mismatch_is_reported(tmp_path):
    result = CliRunner().invoke(main, [write_profile(tmp_path), "--mode", "heap-inuse"])

    assert result.exit_code == 1
    assert "error (mode-mismatch)" in result.output


def test_unreadable_file(tmp_path):
    result = CliRunner().invoke(main, [str(tmp_path / "nope.pprof")])

    assert result.exit_code == 1
    assert "error (read)" in result.output
