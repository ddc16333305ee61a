from .markdown import build_markdown_report

__all__ = ["build_markdown_report"]
