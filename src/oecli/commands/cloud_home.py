# commands/cloud_home.py
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from ..command import CLIStepExecutor
from ..dsl import ExecutorProperties
from ..sequence import StepSequence
from ..settings import DEFAULT_AGE_KEY_DIR
from ..step_workflows import (
    AgeKey,
    CloneRepo,
    CopyFile,
    CreateFile,
    CreateTemplateRepo,
    PreCommit,
    PreCommitCommand,
)

CLOUD_HOME_TEMPLATE = "k8s-at-home/flux-cluster-template"


@dataclass
class CloudHomeInit(CLIStepExecutor):
    """
    Initialize an OECloud@Home repository (K3s cluster managed by flux).

      create repo -> clone -> { oecloudhome.toml | pre-commit hooks | .config.env } -> age key
    """
    name: str
    public: bool = True
    age_key_dir: Path = field(default_factory=lambda: Path(DEFAULT_AGE_KEY_DIR).expanduser())
    template: str = CLOUD_HOME_TEMPLATE

    def set_properties(self, props: ExecutorProperties) -> ExecutorProperties:
        name = self.name

        precommit_sequence = (
            StepSequence("Run pre-commit hooks that come with the repository.")
            .set_steps([PreCommit(PreCommitCommand.INIT, name)])
            .then_run(PreCommit(PreCommitCommand.UPDATE, name))
        )

        sequence = (
            StepSequence("Set up cloud home repository")
            .then_run(CreateTemplateRepo(name, self.template, self.public))
            .then_run(CloneRepo(name))
            .then_run_parallel([
                CreateFile(f"{name}/oecloudhome.toml"),
                precommit_sequence,
                CopyFile(f"{name}/.config.sample.env", f"{name}/.config.env"),
            ])
            .then_run(AgeKey(name, self.age_key_dir))
        )

        return props.then_run_parallel([sequence])
