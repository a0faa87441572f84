"""Gateway exceptions."""


class StartupError(RuntimeError):
    """A collaborator the gateway cannot run without is unavailable.

    Raised during startup only; the process exits instead of retrying.
    """
