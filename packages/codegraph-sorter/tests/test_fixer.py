"""
Fixer tests: edit application, multi-pass sorting, files.
"""

from collections import Counter

import pytest

from codegraph_sorter.common.exceptions import InvariantViolation, OverlappingEditsError, ParseError
from codegraph_sorter.config import SorterSettings
from codegraph_sorter.fixer import apply_edits, sort_file, sort_text
from codegraph_sorter.models import Edit

MESSY = """\
// App entry
import "./polyfills";
import { useState, useEffect } from "react";
import styles from "./App.module.css";
import type { Props } from "./types";
import axios from "axios";
// local helpers
import { b, a } from "../utils";
import Button from "./components/Button"; // default export

export { z, y } from "./z";
export * from "./a";

const x = 1;
export { x };
"""


def content(text: str) -> Counter:
    return Counter(char for char in text if not char.isspace())


class TestApplyEdits:
    def test_applies_in_offset_order(self):
        text = "abcdef"
        edits = [Edit(4, 6, "EF"), Edit(0, 2, "AB")]

        assert apply_edits(text, edits) == "ABcdEF"

    def test_adjacent_edits(self):
        assert apply_edits("abcd", [Edit(0, 2, "x"), Edit(2, 4, "y")]) == "xy"

    def test_overlap(self):
        with pytest.raises(OverlappingEditsError) as exc_info:
            apply_edits("abcdef", [Edit(0, 3, "x"), Edit(2, 4, "y")])

        assert isinstance(exc_info.value, InvariantViolation)


class TestSortText:
    def test_reorders_and_preserves_content(self):
        result = sort_text(MESSY)

        assert result != MESSY
        assert content(result) == content(MESSY)

    def test_idempotent(self):
        once = sort_text(MESSY)

        assert sort_text(once) == once

    def test_full_file(self):
        result = sort_text(MESSY)

        assert result.splitlines()[:15] == [
            "// App entry",
            'import "./polyfills";',
            "",
            'import { useEffect, useState } from "react";',
            "",
            'import axios from "axios";',
            "",
            'import styles from "./App.module.css";',
            "",
            'import Button from "./components/Button"; // default export',
            "",
            "// local helpers",
            'import { a, b } from "../utils";',
            "",
            'import type { Props } from "./types";',
        ]
        assert 'export * from "./a";\nexport { y, z } from "./z";' in result
        assert result.endswith("export { x };\n")

    def test_sorted_text_unchanged(self):
        text = 'import a from "./a";\nimport b from "./b";\n\nexport { c } from "./c";\n'

        assert sort_text(text) == text

    def test_empty_file(self):
        assert sort_text("") == ""

    def test_crlf_preserved(self):
        text = 'import b from "./b";\r\nimport a from "./a";\r\n'

        assert sort_text(text) == 'import a from "./a";\r\nimport b from "./b";\r\n'

    def test_code_after_trailing_comment(self):
        text = 'import b from "b"; // bee\nimport a from "a"; foo();\n'
        settings = SorterSettings(import_groups=[["^"]])

        result = sort_text(text, settings=settings)

        assert result == 'import a from "a"; \nimport b from "b"; // bee\nfoo();\n'
        assert sort_text(result, settings=settings) == result

    def test_javascript(self):
        text = 'import b from "./b";\nimport a from "./a";\nconst el = <div />;\n'

        assert sort_text(text, language="javascript").startswith('import a from "./a";\nimport b from "./b";\n')

    def test_parse_error(self):
        with pytest.raises(ParseError):
            sort_text("import { a from 'a'\n")

    def test_max_passes(self):
        settings = SorterSettings(max_passes=1)

        assert sort_text('import b from "./b";\nimport a from "./a";\n', settings=settings).startswith("import a")


class TestSortFile:
    def test_check_does_not_write(self, tmp_path):
        path = tmp_path / "index.ts"
        path.write_text('import b from "./b";\nimport a from "./a";\n')

        result = sort_file(path)

        assert result.changed
        assert result.passes == 1
        assert path.read_text().startswith("import b")

    def test_write(self, tmp_path):
        path = tmp_path / "index.ts"
        path.write_text('import b from "./b";\nimport a from "./a";\n')

        result = sort_file(path, write=True)

        assert path.read_text() == result.text == 'import a from "./a";\nimport b from "./b";\n'

    def test_unchanged_file(self, tmp_path):
        path = tmp_path / "index.ts"
        path.write_text('import a from "./a";\n')

        result = sort_file(path, write=True)

        assert not result.changed
        assert result.passes == 0
        assert result.edits == []
