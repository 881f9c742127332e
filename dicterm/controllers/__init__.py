from .events import Mode
from .session_controller import SessionController, ViewModel

__all__: list[str] = ["Mode", "SessionController", "ViewModel"]
