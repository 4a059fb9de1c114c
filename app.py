"""Draft Export Workspace - Main Application

Gradio front-end for the draftkit pagination, preflight and export core.
The UI only collects content and settings and renders what the core returns.
"""
import os
import tempfile

import gradio as gr
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

from draftkit import (
    DocumentExporter,
    ExportOptions,
    SharePayload,
    analyze_document,
    build_share_url,
    paginate,
    preview_pages,
    preview_target_pages,
    read_share_payload,
)
from draftkit.config import (
    DEFAULT_EXPORT_QUALITY,
    DEFAULT_SHARE_BASE_URL,
    LAYOUT_PAGE_BUDGETS,
    PAGE_BREAK_TOKEN,
)
from draftkit.exceptions import InvalidConfigurationError

PUBLIC_URL = os.getenv("DRAFTKIT_PUBLIC_URL", DEFAULT_SHARE_BASE_URL)
EXPORT_DIR = os.getenv("DRAFTKIT_EXPORT_DIR", os.path.join(tempfile.gettempdir(), "draftkit"))

SEVERITY_LABELS = {
    "none": "✅ No issues found",
    "minor": "⚠️ Minor issues (export allowed)",
    "major": "⛔ Major issues (acknowledge before exporting)",
}


def render_preview(content: str, layout_format: str, full_book: bool, requested_pages: int) -> tuple:
    """Page preview markdown and page count label."""
    budget = LAYOUT_PAGE_BUDGETS.get(layout_format, LAYOUT_PAGE_BUDGETS["book"])
    total = len(paginate(content, budget))
    pages = preview_pages(content, budget, preview_target_pages(full_book, int(requested_pages)))

    sections = []
    for index, page in enumerate(pages, start=1):
        sections.append(f"**Page {index}**\n\n{page or '_(empty page)_'}")
    return "\n\n---\n\n".join(sections), f"{total} page(s)"


def run_preflight(content: str) -> tuple:
    """Severity label and issues table."""
    report = analyze_document(content)
    return SEVERITY_LABELS[report.severity], report.to_dataframe()


def build_options(title: str, quality: float, compression: bool, include_metadata: bool, watermark: bool) -> ExportOptions:
    try:
        return ExportOptions(
            title=title,
            quality=int(quality),
            compression=compression,
            include_metadata=include_metadata,
            watermark=watermark,
        )
    except InvalidConfigurationError as e:
        raise gr.Error(str(e))


def export_document(
    title: str,
    content: str,
    quality: float,
    compression: bool,
    include_metadata: bool,
    watermark: bool,
    acknowledged: bool,
    progress=gr.Progress()
) -> tuple:
    """Run preflight gating, then export."""
    report = analyze_document(content)
    if report.is_blocking and not acknowledged:
        raise gr.Error("Resolve or acknowledge the major preflight issues before exporting.")

    options = build_options(title, quality, compression, include_metadata, watermark)
    exporter = DocumentExporter(
        output_dir=EXPORT_DIR,
        progress_callback=lambda p, d: progress(p, desc=d),
    )
    return exporter.export(content, options).to_gradio_outputs()


def create_share_link(title: str, content: str, quality: float, compression: bool, include_metadata: bool, watermark: bool) -> str:
    options = build_options(title, quality, compression, include_metadata, watermark)
    url = build_share_url(SharePayload.create(title, content, options), PUBLIC_URL)
    if url is None:
        return "Document is too large to share as a link. Use Export PDF instead."
    return url


def open_share_link(url: str) -> tuple:
    """Load a shared payload into the editor fields."""
    payload = read_share_payload(url)
    if payload is None:
        raise gr.Error("That is not a valid share link.")
    options = payload.options
    return (
        payload.title,
        payload.content,
        options.quality,
        options.compression,
        options.include_metadata,
        options.watermark,
    )


def insert_page_break(content: str) -> str:
    trimmed = (content or "").rstrip()
    return f"{trimmed}\n\n{PAGE_BREAK_TOKEN}\n\n" if trimmed else f"{PAGE_BREAK_TOKEN}\n\n"


# Create Gradio interface
with gr.Blocks(title="Draft Export Workspace") as app:
    gr.Markdown("# 📄 Draft Export Workspace")

    with gr.Row():
        with gr.Column():
            gr.Markdown("## Document")

            title = gr.Textbox(label="Title", placeholder="Untitled Document")
            content = gr.Textbox(
                label="Content (Markdown)",
                lines=20,
                placeholder="# Heading\n\nWrite here...",
            )
            page_break_btn = gr.Button("Insert page break")

            gr.Markdown("---")
            gr.Markdown("### ⚙️ Export Settings")

            quality = gr.Slider(
                minimum=0,
                maximum=100,
                value=DEFAULT_EXPORT_QUALITY,
                step=1,
                label="Export quality",
            )
            compression = gr.Checkbox(label="Compression", value=True)
            watermark = gr.Checkbox(label="Watermark", value=False)
            include_metadata = gr.Checkbox(label="Include metadata", value=True)

            gr.Markdown("---")
            gr.Markdown("### Preflight")

            severity = gr.Textbox(label="Severity", interactive=False)
            issues_table = gr.DataFrame(
                headers=["Level", "Issue", "Details"],
                interactive=False,
                wrap=True,
                label="Issues",
            )
            acknowledged = gr.Checkbox(label="I understand the major issues, export anyway", value=False)

            export_btn = gr.Button("📥 Export PDF", variant="primary", size="lg")
            export_status = gr.Textbox(label="Status", interactive=False)
            output_file = gr.File(label="Download PDF", type="filepath", visible=False)

            gr.Markdown("---")
            gr.Markdown("### Share")

            share_btn = gr.Button("🔗 Create share link")
            share_url = gr.Textbox(label="Share link", interactive=True)
            open_share_btn = gr.Button("Open share link")

        with gr.Column():
            gr.Markdown("## Preview")

            with gr.Row():
                layout_format = gr.Dropdown(
                    choices=list(LAYOUT_PAGE_BUDGETS.keys()),
                    value="zine",
                    label="Layout",
                )
                full_book = gr.Checkbox(label="Full book preview", value=False)
                requested_pages = gr.Slider(minimum=2, maximum=24, value=12, step=1, label="Preview pages")

            page_count = gr.Textbox(label="Pages", interactive=False)
            preview = gr.Markdown()

    preview_inputs = [content, layout_format, full_book, requested_pages]
    for component in preview_inputs:
        component.change(fn=render_preview, inputs=preview_inputs, outputs=[preview, page_count])

    content.change(fn=run_preflight, inputs=[content], outputs=[severity, issues_table])

    page_break_btn.click(fn=insert_page_break, inputs=[content], outputs=[content])

    export_btn.click(
        fn=export_document,
        inputs=[title, content, quality, compression, include_metadata, watermark, acknowledged],
        outputs=[output_file, export_status],
    )

    share_btn.click(
        fn=create_share_link,
        inputs=[title, content, quality, compression, include_metadata, watermark],
        outputs=[share_url],
    )

    open_share_btn.click(
        fn=open_share_link,
        inputs=[share_url],
        outputs=[title, content, quality, compression, include_metadata, watermark],
    )


if __name__ == "__main__":
    app.launch()
