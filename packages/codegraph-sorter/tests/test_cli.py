"""
CLI tests.
"""

import pytest
from typer.testing import CliRunner

from codegraph_sorter.cli import app, iter_source_files
from codegraph_sorter.config import SorterSettings

UNSORTED = 'import b from "./b";\nimport a from "./a";\n'
SORTED = 'import a from "./a";\nimport b from "./b";\n'


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def project(tmp_path):
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "index.ts").write_text(UNSORTED)
    (tmp_path / "src" / "ok.js").write_text(SORTED)
    (tmp_path / "src" / "notes.md").write_text("# notes\n")
    (tmp_path / "node_modules" / "pkg").mkdir(parents=True)
    (tmp_path / "node_modules" / "pkg" / "index.js").write_text(UNSORTED)
    (tmp_path / ".cache").mkdir()
    (tmp_path / ".cache" / "tmp.ts").write_text(UNSORTED)
    return tmp_path


class TestIterSourceFiles:
    def test_skips_excluded_and_hidden_dirs(self, project):
        files = iter_source_files([project], SorterSettings())

        assert sorted(path.name for path in files) == ["index.ts", "ok.js"]

    def test_explicit_file_kept(self, project):
        path = project / "node_modules" / "pkg" / "index.js"

        assert iter_source_files([path], SorterSettings()) == [path]


class TestCheck:
    def test_unsorted_exit_code(self, runner, project):
        result = runner.invoke(app, ["check", str(project)])

        assert result.exit_code == 1
        assert "1 unsorted" in result.stdout
        assert (project / "src" / "index.ts").read_text() == UNSORTED

    def test_sorted_exit_code(self, runner, project):
        result = runner.invoke(app, ["check", str(project / "src" / "ok.js")])

        assert result.exit_code == 0
        assert "0 unsorted" in result.stdout

    def test_diff(self, runner, project):
        result = runner.invoke(app, ["check", str(project / "src" / "index.ts"), "--diff"])

        assert result.exit_code == 1
        assert "@@" in result.stdout

    def test_invalid_config(self, runner, project):
        result = runner.invoke(app, ["check", str(project), "--config", str(project / "missing.yaml")])

        assert result.exit_code == 2

    def test_syntax_error_skipped(self, runner, tmp_path):
        (tmp_path / "broken.ts").write_text("import { a from 'a'\n")

        result = runner.invoke(app, ["check", str(tmp_path)])

        assert result.exit_code == 0
        assert "1 skipped" in result.stdout


class TestFix:
    def test_fix_writes_files(self, runner, project):
        result = runner.invoke(app, ["fix", str(project)])

        assert result.exit_code == 0
        assert (project / "src" / "index.ts").read_text() == SORTED
        assert (project / "node_modules" / "pkg" / "index.js").read_text() == UNSORTED

    def test_fix_with_config(self, runner, project):
        config = project / "sorter.yaml"
        config.write_text('import_groups:\n  - ["^"]\n')

        result = runner.invoke(app, ["fix", str(project / "src"), "--config", str(config), "--sort-by", "name"])

        assert result.exit_code == 0
        assert (project / "src" / "index.ts").read_text() == SORTED
