"""dicterm: terminal dictionary lookup with Leitner review.

Most callers only need the session controller:

    from dicterm import SessionController
"""

from .controllers.session_controller import SessionController, ViewModel
from .errors import DictermError, LoadError

__version__ = "0.1.0"

__all__: list[str] = [
    "SessionController",
    "ViewModel",
    "DictermError",
    "LoadError",
]
