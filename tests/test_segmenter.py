"""Tests for pattern-based segmentation."""

from hybrid_architect.models import SegmentSet
from hybrid_architect.synthesis.segmenter import extract_body, segment


def test_segment_scenario_cloud(scenario_cloud):
    segments = segment(scenario_cloud)
    assert segments.imports == ['import React from "react";']
    assert segments.exports == ["export const x = 1;"]
    assert segments.body == "try {\n    return <div>Hi</div>;\n  } catch (e) {}"


def test_default_function_line_is_not_an_export():
    segments = segment("export default function App() {\n  return null;\n}")
    assert segments.exports == []


def test_default_export_statement_is_an_export():
    segments = segment("function App() {}\nexport default App;")
    assert segments.exports == ["export default App;"]


def test_multiline_import_is_not_captured():
    text = "import {\n  useState,\n} from 'react';\nconst a = 1;"
    assert segment(text).imports == []


def test_import_must_start_the_line():
    text = "  import a from 'a';\nimport b from 'b';"
    assert segment(text).imports == ["import b from 'b';"]


def test_hooks_are_detected_anywhere():
    text = (
        "export default function Counter() {\n"
        "  const [count, setCount] = useState(0);\n"
        "  const [open, setOpen] = useState(() => false);\n"
        "  return count;\n"
        "}"
    )
    assert segment(text).hooks == [
        "const [count, setCount] = useState(0);",
        "const [open, setOpen] = useState(() => false);",
    ]


def test_body_extends_to_last_closing_brace():
    text = (
        "export default function A() {\n"
        "  return 1;\n"
        "}\n"
        "function helper() {\n"
        "  return 2;\n"
        "}"
    )
    assert extract_body(text) == "return 1;\n}\nfunction helper() {\n  return 2;"


def test_body_fallback_strips_imports_and_exports():
    text = "import a from 'a';\nconst x = 1;\nexport const y = 2;"
    assert extract_body(text) == "const x = 1;"


def test_segment_empty_text():
    assert segment("") == SegmentSet(imports=[], exports=[], hooks=[], body="")


def test_segment_unbalanced_braces_does_not_raise():
    segments = segment("export default function Broken() {\n  if (x) {\n")
    assert isinstance(segments.body, str)


def test_crlf_imports_and_exports_are_captured():
    text = 'import React from "react";\r\nexport const x = 1;\r\nreturn 1;'
    segments = segment(text)
    assert segments.imports == ['import React from "react";']
    assert segments.exports == ["export const x = 1;"]
    assert segments.body == "return 1;"


def test_crlf_trailing_export_and_import_without_newline():
    segments = segment("export const a = 1;\r\nimport b from 'b';")
    assert segments.exports == ["export const a = 1;"]
    assert segments.imports == ["import b from 'b';"]
