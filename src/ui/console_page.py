"""NiceGUI console for the knowledge base and retrieval chat."""

import logging
import os
from datetime import datetime

from nicegui import app, events, ui

from src.client import PreconditionError, VectorStoreClient
from src.models.schemas import ChatMessage, FilePayload, KnowledgeFile, Settings
from src.storage import SettingsStore
from src.ui.state import NOT_READY_MESSAGE, ConsoleState
from src.utils import format_bytes, format_date

logger = logging.getLogger(__name__)

STATUS_COLORS = {"completed": "positive", "in_progress": "warning"}

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    body { background: #0f172a; min-height: 100vh; }

    .app-container {
        background: white;
        border-radius: 12px;
        box-shadow: 0 2px 8px rgba(0, 0, 0, 0.1);
        overflow: hidden;
    }

    .header { background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); }

    .message-user {
        background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
        color: white;
        border-radius: 18px 18px 4px 18px;
    }

    .message-assistant {
        background: #f3f4f6;
        color: #1f2937;
        border-radius: 18px 18px 18px 4px;
    }

    .file-row { border-bottom: 1px solid #e5e7eb; }
</style>
"""


async def _read_upload(e: events.UploadEventArguments) -> FilePayload:
    content = await e.file.read()
    return FilePayload(
        name=e.file.name,
        content=content,
        content_type=e.file.content_type or "application/octet-stream",
    )


@ui.page("/")
def console_page() -> None:
    """Main console page."""
    ui.add_head_html(CUSTOM_CSS)
    store = SettingsStore(app.storage.user)
    state = ConsoleState(store.load())
    client = VectorStoreClient()

    def show_error(message: str) -> None:
        state.error = message
        ui.notify(message, type="negative")

    # === Files ===

    async def refresh_files() -> None:
        if not state.ready:
            show_error(NOT_READY_MESSAGE)
            return
        state.error = None
        result = await client.list_files(state.settings)
        if not result.ok:
            show_error(result.error)
            return
        state.set_files(result.data)
        file_list.refresh()

    async def handle_upload(e: events.UploadEventArguments) -> None:
        if not state.ready:
            show_error(NOT_READY_MESSAGE)
            return
        payload = await _read_upload(e)
        state.busy = True
        result = await client.upload_file(payload, state.settings)
        state.busy = False
        if not result.ok:
            show_error(result.error)
            return
        state.add_file(result.data)
        file_list.refresh()
        ui.notify(f"Uploaded {payload.name}", type="positive")

    def notify_stale(file_id: str, error: str) -> None:
        ui.notify(f"Previous version {file_id} was not removed: {error}", type="warning")

    async def replace(file: KnowledgeFile) -> None:
        with ui.dialog() as dialog, ui.card():
            ui.label(f"Replace {file.filename}").classes("text-lg font-semibold")

            async def on_replacement(e: events.UploadEventArguments) -> None:
                payload = await _read_upload(e)
                result = await client.replace_file(
                    file.id, payload, state.settings, on_delete_failure=notify_stale
                )
                dialog.close()
                if not result.ok:
                    show_error(result.error)
                    return
                state.swap_file(file.id, result.data)
                file_list.refresh()
                ui.notify(f"Updated {payload.name}", type="positive")

            ui.upload(on_upload=on_replacement, auto_upload=True).classes("w-full")
            ui.button("Cancel", on_click=dialog.close).props("flat")
        dialog.open()

    async def delete(file: KnowledgeFile) -> None:
        with ui.dialog() as dialog, ui.card():
            ui.label("Delete this file from the vector store?")
            with ui.row():
                ui.button("Delete", on_click=lambda: dialog.submit(True)).props("color=negative")
                ui.button("Cancel", on_click=lambda: dialog.submit(False)).props("flat")
        if not await dialog:
            return

        result = await client.delete_file(file.id, state.settings)
        if not result.ok:
            show_error(result.error)
            return
        state.remove_file(file.id)
        file_list.refresh()
        ui.notify("File deleted.")

    @ui.refreshable
    def file_list() -> None:
        if not state.ready:
            ui.label(NOT_READY_MESSAGE).classes("text-gray-500 p-4")
            return
        if not state.files:
            with ui.column().classes("w-full h-48 items-center justify-center gap-2"):
                ui.icon("folder_open").classes("text-5xl text-gray-300")
                ui.label("No files in this vector store yet").classes("text-gray-400")
            return
        for file in state.files:
            with ui.row().classes("w-full file-row px-4 py-2 items-center gap-4"):
                ui.label(file.filename).classes("flex-grow font-medium")
                ui.label(format_bytes(file.bytes)).classes("w-20 text-sm text-gray-500")
                ui.badge(file.status, color=STATUS_COLORS.get(file.status, "grey"))
                ui.label(format_date(file.created_at)).classes("w-44 text-sm text-gray-500")
                ui.button(icon="sync", on_click=lambda f=file: replace(f)).props("flat round dense")
                ui.button(icon="delete", on_click=lambda f=file: delete(f)).props(
                    "flat round dense color=negative"
                )

    # === Settings ===

    async def save_settings() -> None:
        state.settings = Settings(
            api_key=api_key_input.value.strip(),
            model=model_input.value.strip(),
            vector_store_id=store_id_input.value.strip(),
        )
        store.save(state.settings)
        ui.notify("Settings saved locally.", type="positive")
        tabs.set_value(kb_tab)
        file_list.refresh()
        if state.ready:
            await refresh_files()

    async def create_store() -> None:
        try:
            result = await client.create_vector_store(store_name_input.value, state.settings)
        except PreconditionError as e:
            ui.notify(str(e), type="warning")
            return
        if not result.ok:
            show_error(result.error)
            return

        state.settings = state.settings.model_copy(update={"vector_store_id": result.data.id})
        store.save(state.settings)
        store_id_input.set_value(result.data.id)
        ui.notify(f"Created vector store {result.data.name or result.data.id}", type="positive")

    # === Chat ===

    def render_message(msg: ChatMessage) -> None:
        is_user = msg.role == "user"
        align = "justify-end" if is_user else "justify-start"
        bubble = "message-user" if is_user else "message-assistant"
        with ui.row().classes(f"w-full {align}"):
            with ui.column().classes("max-w-[85%] gap-1"):
                with ui.element("div").classes(f"px-4 py-3 {bubble}"):
                    if is_user:
                        ui.label(msg.content).classes("text-sm whitespace-pre-wrap")
                    else:
                        ui.markdown(msg.content).classes("text-sm")
                ui.label(
                    datetime.fromtimestamp(msg.created_at / 1000).strftime("%I:%M %p")
                ).classes(f"text-[10px] text-gray-400 {'self-end' if is_user else 'self-start'}")

    @ui.refreshable
    def chat_messages() -> None:
        if not state.messages:
            with ui.column().classes("w-full h-48 items-center justify-center gap-2"):
                ui.icon("forum").classes("text-5xl text-gray-300")
                ui.label("Ask about your documents").classes("text-gray-400")
            return
        for msg in state.messages:
            render_message(msg)

    async def send_question() -> None:
        text = question_input.value.strip()
        if not text or state.busy:
            return
        if not state.ready:
            show_error(NOT_READY_MESSAGE)
            return

        history = list(state.messages)
        question_input.value = ""
        state.add_user_message(text)
        chat_messages.refresh()

        state.busy = True
        send_btn.disable()
        result = await client.ask_question(text, history, state.settings)
        state.busy = False
        send_btn.enable()

        if not result.ok:
            show_error(result.error)
            return
        state.add_message(result.data)
        chat_messages.refresh()

    def new_chat() -> None:
        state.clear_chat()
        chat_messages.refresh()

    # === UI Layout ===
    with ui.right_drawer(value=False).classes("bg-white").props("width=420") as drawer:
        with ui.row().classes("w-full items-center justify-between"):
            ui.label("Chat").classes("text-lg font-semibold")
            ui.button(icon="add", on_click=new_chat).props("flat round")
        with ui.scroll_area().classes("flex-grow w-full h-[70vh]"):
            chat_messages()
        with ui.row().classes("w-full gap-2 items-end"):
            question_input = (
                ui.textarea(placeholder="Ask a question...")
                .props("autogrow dense outlined rows=1")
                .classes("flex-grow")
                .on("keydown.enter.prevent", send_question)
            )
            send_btn = ui.button(icon="send", on_click=send_question).props("round unelevated")

    with ui.column().classes("w-full max-w-5xl mx-auto my-8 app-container"):
        with ui.row().classes("w-full header px-5 py-4 items-center justify-between"):
            with ui.row().classes("items-center gap-3"):
                ui.icon("library_books").classes("text-white text-3xl")
                ui.label("Knowledge Base").classes("text-lg font-semibold text-white")
            ui.button(icon="chat", on_click=drawer.toggle).props("flat round color=white")

        with ui.tabs().classes("w-full") as tabs:
            kb_tab = ui.tab("Files")
            config_tab = ui.tab("Settings")

        with ui.tab_panels(tabs, value=kb_tab).classes("w-full"):
            with ui.tab_panel(kb_tab):
                with ui.row().classes("w-full items-center gap-3"):
                    ui.upload(on_upload=handle_upload, auto_upload=True, multiple=False).props(
                        "label='Upload document'"
                    )
                    ui.button("Refresh", icon="refresh", on_click=refresh_files).props("flat")
                file_list()

            with ui.tab_panel(config_tab):
                with ui.column().classes("w-full max-w-lg gap-3"):
                    api_key_input = ui.input(
                        "API key",
                        value=state.settings.api_key,
                        password=True,
                        password_toggle_button=True,
                    ).classes("w-full")
                    model_input = ui.input("Model", value=state.settings.model).classes("w-full")
                    store_id_input = ui.input(
                        "Vector store id", value=state.settings.vector_store_id
                    ).classes("w-full")
                    ui.button("Save", on_click=save_settings)

                    ui.separator()
                    ui.label("Create a new vector store").classes("font-semibold")
                    with ui.row().classes("w-full items-end gap-2"):
                        store_name_input = ui.input("Store name").classes("flex-grow")
                        ui.button("Create", on_click=create_store)

    if state.ready:
        ui.timer(0.1, refresh_files, once=True)


def main() -> None:
    ui.run(
        title="Knowledge Base",
        port=int(os.getenv("PORT", "8080")),
        reload=False,
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "kb-console-secret"),
    )


if __name__ == "__main__":
    main()
