"""Shared HTML frame for outbound email."""

from html import escape


def wrap(store_name: str, content: str) -> str:
    return (
        '<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px;">'
        f'<h1 style="color: #ec4899; text-align: center;">{escape(store_name)}</h1>'
        f'<div style="padding: 20px;">{content}</div>'
        "</div>"
    )


def code_block(code: str) -> str:
    return (
        '<div style="background: #f8f9fa; border-radius: 12px; padding: 20px; text-align: center;">'
        f'<span style="font-size: 32px; font-weight: bold; letter-spacing: 8px;">{escape(code)}</span>'
        "</div>"
    )


def money(amount) -> str:
    return f"{float(amount or 0):.2f}"
