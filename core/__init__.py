from .prompt_manager import PromptManager
from .request import SearchRequest

__all__ = ["PromptManager", "SearchRequest"]
