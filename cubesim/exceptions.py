"""
Custom exceptions for cube state and move operations
"""

class CubeError(Exception):
    """Base class for every error raised by the cube engine"""
    def __init__(self, message: str, error_type: str = None, details: dict = None):
        self.message = message
        self.error_type = error_type or "CubeError"
        self.details = details or {}
        super().__init__(self.message)

class InvalidMoveToken(CubeError):
    """Raised when a move token does not match the move grammar"""
    def __init__(self, token, details: dict = None):
        self.token = token
        super().__init__(f"Invalid move token: {token!r}", "InvalidMoveToken", details)

class CorruptState(CubeError):
    """Raised when a cube state violates the lattice or color invariants"""
    def __init__(self, message: str, details: dict = None):
        super().__init__(message, "CorruptState", details)

class SolverError(CubeError):
    """Base class for failures at the solver boundary"""
    def __init__(self, message: str, error_type: str = None, details: dict = None):
        super().__init__(message, error_type or "SolverError", details)

class SolverUnavailable(SolverError):
    """Raised when no solver backend can be loaded"""
    def __init__(self, message: str = "No solver backend available", details: dict = None):
        super().__init__(message, "SolverUnavailable", details)

class SolverFailed(SolverError):
    """Raised when the solver raised or returned nothing usable"""
    def __init__(self, message: str = "Solver failed", facelets: str = None, details: dict = None):
        self.facelets = facelets
        super().__init__(message, "SolverFailed", details)

class SequencerBusy(CubeError):
    """Raised when a scramble or solve is requested while moves are pending"""
    def __init__(self, message: str = "Moves are still pending", details: dict = None):
        super().__init__(message, "SequencerBusy", details)
