"""Shared fixtures."""

import pytest


@pytest.fixture
def project_dir(tmp_path):
    """Create a small project tree on disk.

    Structure:
        <tmp>/
        └── res/
            ├── css/
            │   ├── a.css
            │   ├── b.css
            │   └── sub/
            │       └── c.css
            └── js/
                └── app.js
    """
    css = tmp_path / "res" / "css"
    (css / "sub").mkdir(parents=True)
    (css / "a.css").write_text("a { color: red; }\n")
    (css / "b.css").write_text("b { color: blue; }\n")
    (css / "sub" / "c.css").write_text("c { }\n")

    js = tmp_path / "res" / "js"
    js.mkdir()
    (js / "app.js").write_text("console.log('app');\n")

    return tmp_path
