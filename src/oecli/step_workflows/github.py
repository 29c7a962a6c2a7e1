# step_workflows/github.py
# Work items backed by the GitHub CLI (`gh`).

from __future__ import annotations

import re
from pathlib import Path

from ..errors import StepError
from ..model import ShouldRunResult, WorkItem
from ..process import cmd, run

_LOGGED_IN_AS = re.compile(r"github\.com as (\S+) \(")
_LOGGED_IN_ACCOUNT = re.compile(r"github\.com account (\S+) \(")


def logged_in_user() -> str:
    """
    Return the username `gh` is authenticated as.

    `gh auth status` reports on stderr (older releases) or stdout, as
    "Logged in to github.com as <user> (...)" or
    "Logged in to github.com account <user> (...)".
    """
    proc = run(["gh", "auth", "status"])
    output = f"{proc.stdout or ''}\n{proc.stderr or ''}"
    match = _LOGGED_IN_AS.search(output) or _LOGGED_IN_ACCOUNT.search(output)
    if proc.returncode != 0 or match is None:
        raise StepError("GitHub CLI authentication failed. Make sure you are logged in.")
    return match.group(1)


class CreateTemplateRepo(WorkItem):
    """Create a GitHub repository from a template repository."""

    description = "Will check if the repo already exists, if it doesn't; Will create it from the template."

    def __init__(self, name: str, template: str, public: bool = False):
        self.name = name
        self.template = template
        self.public = public
        self.title = f"Creating repository {name} from template {template}"

    def should_run(self) -> ShouldRunResult:
        # The auth check has to pass before "repo view" means anything.
        try:
            auth = run(["gh", "auth", "status"])
        except StepError as e:
            return ShouldRunResult.error(f"Github CLI had an unexpected failure.\n{e.message}")
        if auth.returncode != 0:
            return ShouldRunResult.error("GitHub CLI authentication failed. Make sure you are logged in.")

        try:
            view = run(["gh", "repo", "view", self.name])
        except StepError as e:
            return ShouldRunResult.error(f"Failed to check if repo {self.name} exists.\n{e.message}")
        if view.returncode == 0:
            return ShouldRunResult.skip()
        return ShouldRunResult.ok()

    def execute(self) -> str:
        visibility = "--public" if self.public else "--private"
        cmd(
            ["gh", "repo", "create", self.name, "--template", self.template, visibility],
            f"gh repo create {self.name}",
        )
        return f"Created Github repository {self.name}"


class CloneRepo(WorkItem):
    """Clone github.com/<logged in user>/<name> into ./<name>."""

    description = "Will clone the repo from the current logged in user."

    def __init__(self, repo_name: str):
        self.repo_name = repo_name
        self.title = f"Cloning repo {repo_name}"

    def should_run(self) -> ShouldRunResult:
        if Path(self.repo_name).exists():
            return ShouldRunResult.skip()
        return ShouldRunResult.ok()

    def execute(self) -> str:
        full_repo = f"{logged_in_user()}/{self.repo_name}"
        proc = run(["gh", "repo", "clone", full_repo])
        if proc.returncode != 0:
            raise StepError(f"Failed to clone repo {self.repo_name}.\n{(proc.stderr or '').strip()}")
        return f"Repo {self.repo_name} cloned."
