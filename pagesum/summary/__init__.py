"""Summary package: text bounding, the chat-completion client and the pipeline."""

from pagesum.summary.client import chat, custom_gpt, summarize_text
from pagesum.summary.pipeline import PipelineResult, Stage, extract_url_text, summarize_url
from pagesum.summary.preprocess import bound_text, count_tokens

__all__ = [
    "bound_text",
    "count_tokens",
    "chat",
    "custom_gpt",
    "summarize_text",
    "summarize_url",
    "extract_url_text",
    "PipelineResult",
    "Stage",
]
