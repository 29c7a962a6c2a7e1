from .cloud_home import CloudHomeInit
from .demo import Demo
from .pwa import PwaCreate
from .workflow import WorkflowFile

__all__ = ["CloudHomeInit", "Demo", "PwaCreate", "WorkflowFile"]
