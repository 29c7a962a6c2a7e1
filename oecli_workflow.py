# oecli_workflow.py
# Example workflow for `oecli run`: scaffold a small python project.
# Every step checks for its own output first, so running it twice is safe.
from __future__ import annotations

from oecli import ExecutorProperties, sequence, sh


def workflow():
    scaffold = sequence(
        "Scaffold sample project",
        sh("Create project dir", "mkdir -p sample", creates="sample"),
        [
            sh("Create package", "mkdir -p sample/src/sample && touch sample/src/sample/__init__.py",
               creates="sample/src/sample/__init__.py"),
            sh("Create tests dir", "mkdir -p sample/tests", creates="sample/tests"),
        ],
        sh("Write README", "echo '# sample' > sample/README.md", creates="sample/README.md"),
        description="Directories first, then files that live in them",
    )

    return (
        ExecutorProperties()
        .run(scaffold)
        .then_run(sh("List project", "find sample -type f", cwd="."))
    )
