"""Exceptions raised while provisioning certificates."""


class ProvisioningError(Exception):
    """Base class for every provisioning failure."""


class WorkspaceError(ProvisioningError):
    """Workspace could not be created or its output files could not be read."""


class ToolUnavailableError(ProvisioningError):
    """External executable is not on PATH.

    Strategies never raise this directly; it is chained as the cause of the
    invocation error for the step that needed the tool.
    """

    def __init__(self, tool: str) -> None:
        self.tool = tool
        super().__init__(f"{tool} executable not found on PATH")


class ToolInvocationError(ProvisioningError):
    """External tool did not complete successfully.

    Attributes:
        tool: Executable that was invoked
        stderr: Diagnostic text captured from the tool (or a description of
            why it never ran)
        returncode: Exit status, None when the process never exited normally
    """

    step = "trusted CA helper"

    def __init__(self, tool: str, stderr: str, returncode: int | None = None) -> None:
        self.tool = tool
        self.stderr = stderr
        self.returncode = returncode

        status = f"{tool}, exit {returncode}" if returncode is not None else tool
        super().__init__(f"{self.step} failed ({status}): {stderr}")


class KeyGenerationError(ToolInvocationError):
    step = "key generation"


class CsrGenerationError(ToolInvocationError):
    step = "CSR generation"


class SigningError(ToolInvocationError):
    step = "certificate signing"
