from .memos import TOOL_NAMES, create_memos_server, create_memos_tools

__all__ = ["TOOL_NAMES", "create_memos_server", "create_memos_tools"]
