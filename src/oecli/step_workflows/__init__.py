from .age import AgeKey
from .filesystem import CopyFile, CreateFile
from .github import CloneRepo, CreateTemplateRepo, logged_in_user
from .node import NpmInstall
from .precommit import PreCommit, PreCommitCommand
from .shell import ShellItem

__all__ = [
    "AgeKey",
    "CloneRepo",
    "CopyFile",
    "CreateFile",
    "CreateTemplateRepo",
    "NpmInstall",
    "PreCommit",
    "PreCommitCommand",
    "ShellItem",
    "logged_in_user",
]
