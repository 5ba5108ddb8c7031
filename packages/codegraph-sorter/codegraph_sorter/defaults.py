"""
Default group tables.

Each group is a list of regex patterns matched against module paths. Groups
are printed in this order with a blank line between them.
"""


def folder_patterns(name: str) -> list[str]:
    """Aliased, sibling and bare paths into a project folder (`ui/hooks`, `./hooks`, `hooks`)"""
    return [f"^(@|ui/{name})", f"^(@|./{name})", f"^(@|{name})"]


REACT = ["react", "react-dom", "react-router-dom", "recoil"]
REACT_LIBRARIES = ["^react-", "^@react-"]
NEXT = ["next"]
EXTERNAL_LIBRARIES = [r"^@?\w"]

STYLES = [r"^.+\.?(.styles)$", r"^.+\.?(.scss)$", r"^.+\.?(.css)$"]

ASSETS = ["assets"]
CONFIGURATION = ["configuration"]
CORE_LAYER = ["core"]
UI = [
    folder_patterns(name)
    for name in ["components", "hooks", "pages", "stores", "contexts", "providers", "styles", "helpers", "utils"]
]

# Side-effect imports (key starts with NUL), matched to the end of the key
SIDE_EFFECTS = [r"^\u0000.*"]

NOT_MATCHED = ["^"]

# Relative paths, then type-only declarations (key ends with NUL)
TYPES = [[r"^\."], [r"^.+\u0000$"]]

DEFAULT_IMPORT_GROUPS: list[list[str]] = [
    SIDE_EFFECTS,
    REACT,
    REACT_LIBRARIES,
    NEXT,
    EXTERNAL_LIBRARIES,
    STYLES,
    ASSETS,
    CONFIGURATION,
    CORE_LAYER,
    *UI,
    NOT_MATCHED,
    *TYPES,
]

DEFAULT_EXPORT_GROUPS: list[list[str]] = [NOT_MATCHED, *TYPES]
