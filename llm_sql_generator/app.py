"""
Web arayüzü modülü - Gradio arayüzü.
"""
import logging
from typing import Tuple

import gradio as gr

from .exceptions import Txt2SqlError
from .llm import LLMHandler
from .schema import SAMPLE_QUESTION, SAMPLE_SCHEMA

logger = logging.getLogger(__name__)


class SQLGeneratorApp:
    """SQL oluşturucu uygulama sınıfı."""

    def __init__(self, llm_handler: LLMHandler, schema_text: str = SAMPLE_SCHEMA):
        self.llm_handler = llm_handler
        self.schema_text = schema_text

    def generate_sql(self, question: str, schema_text: str) -> Tuple[str, str]:
        """Kullanıcı sorusundan SQL oluşturur.

        Args:
            question: Kullanıcı sorusu
            schema_text: Arayüzde düzenlenmiş şema metni

        Returns:
            (sql_query, status_message)
        """
        if not question or not question.strip():
            return "", ""

        schema_text = schema_text if schema_text and schema_text.strip() else self.schema_text
        try:
            sql_query = self.llm_handler.generate_sql(question, schema_text)
        except Txt2SqlError as e:
            logger.error("convert failed", exc_info=True)
            cause = e.__cause__ or e
            return "", f"Error: {cause}"

        return sql_query, "SQL query generated successfully."

    def create_ui(self) -> gr.Blocks:
        """Gradio kullanıcı arayüzünü oluşturur."""
        with gr.Blocks(title="Text to SQL Generator") as demo:
            gr.Markdown("# Text to SQL Generator")

            with gr.Row():
                with gr.Column(scale=2):
                    question = gr.Textbox(
                        label="Question",
                        placeholder=f"Example: {SAMPLE_QUESTION}",
                        lines=3,
                    )

                    with gr.Row():
                        submit_btn = gr.Button("Generate SQL", variant="primary")
                        clear_btn = gr.Button("Clear")

                    sql_output = gr.Code(label="Generated SQL", language="sql", lines=5)
                    status = gr.Textbox(label="Status", interactive=False)

                with gr.Column(scale=1):
                    schema = gr.Textbox(
                        label="Database Schema",
                        value=self.schema_text,
                        lines=20,
                        max_lines=20,
                    )

            submit_btn.click(
                fn=self.generate_sql,
                inputs=[question, schema],
                outputs=[sql_output, status],
            )
            clear_btn.click(
                fn=lambda: ("", "", ""),
                outputs=[question, sql_output, status],
            )

        return demo

    def launch(self, **kwargs):
        logger.info("starting web UI")
        self.create_ui().launch(**kwargs)
