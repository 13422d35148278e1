from pathlib import Path

from docport.app import DocsPorterApp


def get_project_root() -> Path:
    return Path.cwd()


def make_app() -> DocsPorterApp:
    return DocsPorterApp(root_path=get_project_root())
