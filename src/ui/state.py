"""Per-browser console state: settings, cached file list and conversation."""

import time
import uuid

from src.models.schemas import ChatMessage, KnowledgeFile, Settings

NOT_READY_MESSAGE = "Add an API key and vector store to start."


class ConsoleState:
    """Owns everything the client layer does not: the local file-list
    cache and the chat history threaded into each question."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.files: list[KnowledgeFile] = []
        self.messages: list[ChatMessage] = []
        self.error: str | None = None
        self.busy: bool = False

    @property
    def ready(self) -> bool:
        return self.settings.is_ready

    def set_files(self, files: list[KnowledgeFile]) -> None:
        self.files = list(files)

    def add_file(self, file: KnowledgeFile) -> None:
        self.files.insert(0, file)

    def swap_file(self, old_id: str, file: KnowledgeFile) -> None:
        self.files = [file, *(f for f in self.files if f.id != old_id)]

    def remove_file(self, file_id: str) -> None:
        self.files = [f for f in self.files if f.id != file_id]

    def add_user_message(self, content: str) -> ChatMessage:
        message = ChatMessage(
            id=str(uuid.uuid4()),
            role="user",
            content=content,
            created_at=int(time.time() * 1000),
        )
        self.messages.append(message)
        return message

    def add_message(self, message: ChatMessage) -> None:
        self.messages.append(message)

    def clear_chat(self) -> None:
        self.messages.clear()
