class MandelreelError(Exception):
    """Base class for every error raised by mandelreel."""


class InvalidParameter(MandelreelError, ValueError):
    pass


class OutOfRange(MandelreelError, IndexError):
    pass


class ZoomRejected(MandelreelError):
    """A zoom request that was refused without producing frames."""


class ZoomAtCeiling(ZoomRejected):
    pass


class ZoomInProgress(ZoomRejected):
    pass
