"""NiceGUI contract review chat page."""

import logging

from nicegui import events, ui

from contract_review.llm.prompt import TEXT_SEPARATOR
from contract_review.models.schemas import ChatMessage, MessageRole, UploadedFile
from contract_review.ui.client import post_chat
from contract_review.ui.state import ChatSession

logger = logging.getLogger(__name__)

CUSTOM_CSS = """
<style>
    body { background: #f9fafb; min-height: 100vh; }

    .message-user {
        background: #3b82f6;
        color: white;
        border-radius: 12px;
    }

    .message-ai {
        background: white;
        color: #1f2937;
        border: 1px solid #e5e7eb;
        border-radius: 12px;
    }

    .debug-panel {
        font-size: 0.75rem;
        white-space: pre-wrap;
        border-radius: 6px;
    }

    .attachment-chip {
        background: #eff6ff;
        border-radius: 9999px;
    }
</style>
"""

ACCEPTED_FILES = "image/*,.pdf,.doc,.docx,.xls,.xlsx"


def render_nav() -> None:
    with ui.row().classes("w-full justify-end gap-4 text-sm"):
        ui.link("チャット", "/")
        ui.link("ナレッジ管理", "/knowledge")


@ui.page("/")
def chat_page() -> None:
    """Main chat page."""
    ui.add_head_html(CUSTOM_CSS)
    session = ChatSession()

    messages_container: ui.column
    panels_container: ui.column
    attachments_row: ui.row
    input_field: ui.textarea
    instruction_field: ui.input
    send_btn: ui.button
    upload: ui.upload

    def render_message(msg: ChatMessage) -> None:
        is_user = msg.role is MessageRole.USER
        align = "justify-end" if is_user else "justify-start"
        bubble = "message-user" if is_user else "message-ai"

        with ui.row().classes(f"w-full {align}"):
            with ui.column().classes(f"max-w-[80%] gap-1 p-4 {bubble}"):
                if is_user:
                    ui.label(msg.content).classes("whitespace-pre-wrap")
                else:
                    ui.markdown(msg.content)
                if msg.attachments:
                    ui.label("添付ファイル:").classes("text-sm opacity-80")
                    for name in msg.attachments:
                        ui.label(f"📎 {name}").classes("text-sm opacity-80")
                ui.label(msg.timestamp.strftime("%H:%M:%S")).classes("text-xs opacity-60")

    def refresh_messages() -> None:
        messages_container.clear()
        with messages_container:
            if not session.messages:
                with ui.column().classes("w-full items-center py-8 text-gray-500"):
                    ui.label("契約書の内容や画像をアップロードして、")
                    ui.label("リーガルリスクの分析を開始してください。")
            for msg in session.messages:
                render_message(msg)
            if session.is_loading:
                with ui.row().classes("w-full justify-start"):
                    with ui.row().classes("message-ai p-4 items-center gap-2"):
                        ui.spinner(size="sm")
                        ui.label("分析中...").classes("text-gray-600")

    def refresh_panels() -> None:
        panels_container.clear()
        with panels_container:
            if session.error_detail:
                with ui.column().classes("w-full bg-red-100 text-red-800 p-4 debug-panel"):
                    ui.label("デバッグ情報:").classes("font-bold")
                    ui.code(session.error_detail, language="json").classes("w-full")
            if session.extracted_texts:
                with ui.column().classes("w-full bg-gray-100 text-gray-800 p-4 debug-panel"):
                    ui.label("抽出テキスト:").classes("font-bold")
                    ui.label(TEXT_SEPARATOR.join(session.extracted_texts))
            if session.last_prompt:
                with ui.column().classes("w-full bg-blue-50 text-blue-800 p-4 debug-panel"):
                    ui.label("AIに送信したプロンプト:").classes("font-bold")
                    ui.label(session.last_prompt)

    def update_send_button() -> None:
        send_btn.set_enabled(
            session.send_enabled(input_field.value or "", instruction_field.value or "")
        )

    def refresh_attachments() -> None:
        attachments_row.clear()
        with attachments_row:
            if session.attachments:
                ui.label(f"{len(session.attachments)}個のファイル").classes("text-sm text-gray-600")
            for index, file in enumerate(session.attachments):
                with ui.row().classes("attachment-chip items-center gap-2 px-3 py-1 text-sm"):
                    ui.label(f"📎 {file.filename}")
                    ui.button(
                        "×", on_click=lambda _, i=index: remove_attachment(i)
                    ).props("flat dense color=red")
        update_send_button()

    def remove_attachment(index: int) -> None:
        session.remove_attachment(index)
        refresh_attachments()

    async def handle_upload(e: events.UploadEventArguments) -> None:
        session.add_attachment(
            UploadedFile(
                filename=e.file.name,
                content_type=e.file.content_type,
                content=await e.file.read(),
            )
        )
        refresh_attachments()

    def new_chat() -> None:
        session.clear()
        upload.reset()
        refresh_attachments()
        refresh_messages()
        refresh_panels()

    async def send_message() -> None:
        text = input_field.value or ""
        instruction = instruction_field.value or ""
        if not session.can_send(text, instruction):
            return

        files = session.begin_send(text, instruction)
        input_field.value = ""
        instruction_field.value = ""
        upload.reset()
        refresh_attachments()
        refresh_messages()
        refresh_panels()

        try:
            reply = await post_chat(text, instruction, files)
        except Exception as e:
            logger.exception("Chat request failed")
            session.record_failure(str(e))
        else:
            session.record_reply(reply.ok, reply.content, reply.debug)
        finally:
            update_send_button()
            refresh_messages()
            refresh_panels()

    # === UI Layout ===
    with ui.column().classes("w-full max-w-4xl mx-auto px-4 py-8 gap-6"):
        render_nav()

        with ui.column().classes("w-full items-center gap-1"):
            ui.label("契約書レビューAI").classes("text-3xl font-bold text-gray-900")
            ui.label("一流の弁護士視点からリーガルリスクを分析します").classes("text-gray-600")

        with ui.card().classes("w-full"):
            with ui.row().classes("w-full items-center gap-2"):
                ui.element("div").classes("w-3 h-3 bg-green-500 rounded-full")
                ui.label("AI リーガルアシスタント").classes("text-lg font-semibold")
                ui.space()
                ui.button(icon="add", on_click=new_chat).props("flat round").tooltip("新しいチャット")
            with ui.scroll_area().classes("w-full h-96"):
                messages_container = ui.column().classes("w-full gap-4")
                refresh_messages()

        panels_container = ui.column().classes("w-full gap-4")

        with ui.card().classes("w-full"):
            with ui.column().classes("w-full gap-4"):
                upload = (
                    ui.upload(
                        label="📎 画像・ファイル追加",
                        multiple=True,
                        auto_upload=True,
                        on_upload=handle_upload,
                    )
                    .props(f'accept="{ACCEPTED_FILES}" flat bordered')
                    .classes("w-full")
                )
                attachments_row = ui.row().classes("w-full flex-wrap gap-2")

                input_field = (
                    ui.textarea(
                        placeholder="契約書の内容を入力してください...",
                        on_change=update_send_button,
                    )
                    .props("outlined autogrow")
                    .classes("w-full")
                    .on("keydown.enter.exact.prevent", send_message)
                )
                instruction_field = ui.input(
                    placeholder="AIへの追加指示（例：特定条項のリスクを重点的に指摘して など）",
                    on_change=update_send_button,
                ).classes("w-full")

                with ui.row().classes("w-full justify-end"):
                    send_btn = ui.button("リーガル分析を実行", on_click=send_message).classes("px-6")
                    send_btn.disable()
