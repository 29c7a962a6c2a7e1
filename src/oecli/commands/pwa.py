# commands/pwa.py
from __future__ import annotations

from dataclasses import dataclass

from ..command import CLIStepExecutor
from ..dsl import ExecutorProperties
from ..sequence import StepSequence
from ..step_workflows import CloneRepo, CreateTemplateRepo, NpmInstall

PWA_TEMPLATE = "ctron/patternfly-yew-quickstart"


@dataclass
class PwaCreate(CLIStepExecutor):
    """
    Create a progressive web app: a new GitHub repository from the Yew
    quickstart template, cloned locally, with its node dependencies
    installed.
    """
    name: str
    public: bool = False
    template: str = PWA_TEMPLATE

    def set_properties(self, props: ExecutorProperties) -> ExecutorProperties:
        sequence = (
            StepSequence("Set up progressive web app", f"Create, clone and install {self.name}")
            .then_run(CreateTemplateRepo(self.name, self.template, self.public))
            .then_run(CloneRepo(self.name))
            .then_run(NpmInstall(self.name))
        )
        return props.then_run_parallel([sequence])
