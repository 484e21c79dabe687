"""NiceGUI knowledge notes page.

Notes live only in the page's memory and are not fed into prompts.
"""

from nicegui import ui

from contract_review.models.schemas import KnowledgeItem
from contract_review.ui.chat_page import render_nav
from contract_review.ui.state import KnowledgeBook


@ui.page("/knowledge")
def knowledge_page() -> None:
    """Knowledge management page."""
    book = KnowledgeBook()

    items_container: ui.column
    title_field: ui.input
    category_field: ui.input
    content_field: ui.textarea
    add_btn: ui.button

    def update_add_button() -> None:
        filled = all(
            (field.value or "").strip() for field in (title_field, category_field, content_field)
        )
        add_btn.set_enabled(filled)

    def render_item(item: KnowledgeItem) -> None:
        with ui.card().classes("w-full"):
            with ui.row().classes("w-full items-start justify-between"):
                with ui.column().classes("gap-1"):
                    ui.label(item.title).classes("text-lg font-semibold")
                    with ui.row().classes("gap-2 text-sm text-gray-500"):
                        ui.badge(item.category).props("color=blue-2 text-color=blue-9")
                        ui.label(item.created_at.strftime("%Y-%m-%d %H:%M"))
                ui.button(
                    "削除", on_click=lambda _, i=item.id: delete_item(i)
                ).props("flat color=red")
            ui.label(item.content).classes("whitespace-pre-wrap text-gray-700")

    def refresh_items() -> None:
        items_container.clear()
        with items_container:
            ui.label(f"登録済みナレッジ ({len(book.items)}件)").classes("text-xl font-semibold")
            if not book.items:
                ui.label("まだナレッジが登録されていません。").classes("text-gray-500")
            for item in book.items:
                render_item(item)

    def add_item() -> None:
        item = book.add(title_field.value or "", content_field.value or "", category_field.value or "")
        if item is None:
            return
        title_field.value = ""
        category_field.value = ""
        content_field.value = ""
        refresh_items()

    def delete_item(item_id: str) -> None:
        book.delete(item_id)
        refresh_items()

    # === UI Layout ===
    with ui.column().classes("w-full max-w-4xl mx-auto px-4 py-8 gap-6"):
        render_nav()

        with ui.column().classes("w-full items-center gap-1"):
            ui.label("法務ナレッジ管理").classes("text-3xl font-bold text-gray-900")
            ui.label("自社の法務知見を追加して、AIの分析精度を向上させます").classes("text-gray-600")

        with ui.card().classes("w-full"):
            ui.label("新しいナレッジを追加").classes("text-lg font-semibold")
            with ui.row().classes("w-full gap-4 no-wrap"):
                title_field = ui.input(
                    "タイトル",
                    placeholder="例: 取引先との契約における注意点",
                    on_change=update_add_button,
                ).classes("flex-grow")
                category_field = ui.input(
                    "カテゴリ",
                    placeholder="例: 契約法、労働法、知的財産",
                    on_change=update_add_button,
                ).classes("flex-grow")
            content_field = (
                ui.textarea(
                    "内容",
                    placeholder="法務知見の詳細を入力してください...",
                    on_change=update_add_button,
                )
                .props("outlined")
                .classes("w-full")
            )
            with ui.row().classes("w-full justify-end"):
                add_btn = ui.button("ナレッジを追加", on_click=add_item).classes("px-6")
                add_btn.disable()

        items_container = ui.column().classes("w-full gap-4")
        refresh_items()
