"""Error types for corkboard."""


class CorkboardError(Exception):
    """Base class for corkboard errors."""


class IntegrityError(CorkboardError):
    """The normalized board broke one of its structural invariants."""


class GatewayTimeout(CorkboardError):
    """A persistence call did not settle within the configured timeout."""


class OperationFailed(CorkboardError):
    """A dispatched mutation was rejected or could not be persisted.

    The message is meant for the user. Validation, business and transport
    failures all end up here without distinction.
    """

    action = "operation"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class CreateBoardFailed(OperationFailed):
    action = "create_board"


class RenameBoardFailed(OperationFailed):
    action = "rename_board"


class DeleteBoardFailed(OperationFailed):
    action = "delete_board"


class CreateListFailed(OperationFailed):
    action = "create_list"


class RenameListFailed(OperationFailed):
    action = "rename_list"


class ReorderListsFailed(OperationFailed):
    action = "reorder_lists"


class DeleteListFailed(OperationFailed):
    action = "delete_list"


class CreateCardFailed(OperationFailed):
    action = "create_card"


class RenameCardFailed(OperationFailed):
    action = "rename_card"


class ReorderCardsFailed(OperationFailed):
    action = "reorder_cards"


class DeleteCardFailed(OperationFailed):
    action = "delete_card"
