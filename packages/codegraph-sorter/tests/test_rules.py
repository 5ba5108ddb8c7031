"""
Import and export rule tests.
"""

import pytest

from codegraph_sorter.config import SortOptions
from codegraph_sorter.fixer import apply_edits
from codegraph_sorter.models import SortBy
from codegraph_sorter.rules import sort_exports, sort_imports


@pytest.fixture
def run_imports(parse):
    def _run(text: str, options: SortOptions | None = None) -> str:
        source_code = parse(text)
        return apply_edits(text, sort_imports(source_code.statements, source_code, options))

    return _run


@pytest.fixture
def run_exports(parse):
    def _run(text: str, options: SortOptions | None = None) -> str:
        source_code = parse(text)
        return apply_edits(text, sort_exports(source_code.statements, source_code, options))

    return _run


class TestImportRule:
    def test_sorted_input_has_no_edits(self, parse):
        text = 'import a from "./a";\nimport b from "./b";\n'
        source_code = parse(text)

        assert sort_imports(source_code.statements, source_code) == []

    def test_sort_by_path(self, run_imports):
        text = 'import b from "./b";\nimport a from "./a";\n'

        assert run_imports(text) == 'import a from "./a";\nimport b from "./b";\n'

    def test_default_groups(self, run_imports):
        text = 'import x from "./x";\nimport lodash from "lodash";\nimport React from "react";\n'

        assert run_imports(text) == (
            'import React from "react";\n\nimport lodash from "lodash";\n\nimport x from "./x";\n'
        )

    def test_type_imports_last(self, run_imports):
        text = 'import type { A } from "./a";\nimport b from "./b";\n'

        assert run_imports(text) == 'import b from "./b";\n\nimport type { A } from "./a";\n'

    def test_side_effect_first(self, run_imports):
        text = 'import b from "b";\nimport "setup";\nimport a from "a";\n'

        assert run_imports(text) == 'import "setup";\n\nimport a from "a";\nimport b from "b";\n'

    def test_side_effect_stylesheet_first(self, run_imports):
        text = 'import React from "react";\nimport "./reset.css";\nimport styles from "./App.css";\n'

        assert run_imports(text) == (
            'import "./reset.css";\n\nimport React from "react";\n\nimport styles from "./App.css";\n'
        )

    def test_side_effects_in_single_group(self, run_imports):
        text = 'import b from "b";\nimport "setup";\nimport a from "a";\n'

        result = run_imports(text, SortOptions(groups=[["^"]]))

        assert result == 'import "setup";\nimport a from "a";\nimport b from "b";\n'

    def test_trailing_comment_stays_attached(self, run_imports):
        text = 'import b from "./b";\nimport a from "./a"; // keep\n'

        assert run_imports(text) == 'import a from "./a"; // keep\nimport b from "./b";\n'

    def test_chunks_sorted_independently(self, run_imports):
        text = 'import b from "./b";\nimport a from "./a";\nconst x = 1;\nimport d from "./d";\nimport c from "./c";\n'

        assert run_imports(text) == (
            'import a from "./a";\nimport b from "./b";\nconst x = 1;\nimport c from "./c";\nimport d from "./d";\n'
        )

    def test_code_after_chunk_untouched(self, run_imports):
        text = '#!/usr/bin/env node\n// header\nimport b from "./b";\nimport a from "./a";\n\nrun(a, b);\n'

        assert run_imports(text) == (
            '#!/usr/bin/env node\n// header\nimport a from "./a";\nimport b from "./b";\n\nrun(a, b);\n'
        )

    def test_sort_by_name(self, run_imports):
        text = 'import zed from "./a";\nimport alpha from "./b";\n'

        result = run_imports(text, SortOptions(groups=[["^"]], sort_by=SortBy.NAME))

        assert result == 'import alpha from "./b";\nimport zed from "./a";\n'

    def test_specifiers_only(self, run_imports):
        assert run_imports('import {c, a, b} from "x";\n') == 'import {a, b, c} from "x";\n'

    def test_import_equals_breaks_chunk(self, run_imports):
        text = 'import b from "./b";\nimport fs = require("fs");\nimport a from "./a";\n'

        assert run_imports(text) == text


class TestExportRule:
    def test_reexports_sorted_by_path(self, run_exports):
        text = 'export {b} from "./b";\nexport {a} from "./a";\n'

        assert run_exports(text) == 'export {a} from "./a";\nexport {b} from "./b";\n'

    def test_export_all_in_chunk(self, run_exports):
        text = 'export * from "./c";\nexport * as b from "./b";\nexport {a} from "./a";\n'

        assert run_exports(text) == 'export {a} from "./a";\nexport * as b from "./b";\nexport * from "./c";\n'

    def test_comment_starts_new_chunk(self, run_exports):
        text = (
            'export {d} from "d";\nexport {c} from "c";\n\n'
            '// section\nexport {b} from "b";\nexport {a} from "a";\n'
        )

        assert run_exports(text) == (
            'export {c} from "c";\nexport {d} from "d";\n\n'
            '// section\nexport {a} from "a";\nexport {b} from "b";\n'
        )

    def test_same_line_comment_does_not_split(self, run_exports):
        text = 'export {b} from "b"; // bee\nexport {a} from "a";\n'

        assert run_exports(text) == 'export {a} from "a";\nexport {b} from "b"; // bee\n'

    def test_declarations_break_chunks(self, run_exports):
        text = 'export {b} from "b";\nexport const x = 1;\nexport {a} from "a";\n'

        assert run_exports(text) == text

    def test_local_export_list_sorted(self, run_exports):
        text = "const a = 1;\nconst b = 2;\nexport {b, a};\n"

        assert run_exports(text) == "const a = 1;\nconst b = 2;\nexport {a, b};\n"

    def test_export_alias_sorted_by_exported_name(self, run_exports):
        text = "const a = 1;\nconst b = 2;\nexport {a as z, b};\n"

        assert run_exports(text) == "const a = 1;\nconst b = 2;\nexport {b, a as z};\n"

    def test_imports_ignored(self, parse):
        text = 'import b from "./b";\nimport a from "./a";\n'
        source_code = parse(text)

        assert sort_exports(source_code.statements, source_code) == []
