"""
HTML Builder Utilities
======================
Shared utilities for generating static timetable pages.
"""

from html import escape
from typing import List, Optional


def get_base_styles() -> str:
    """
    Return common CSS styles used by timetable pages.

    Includes:
    - Dark theme base styles
    - Header styling
    - Timetable grid styling
    - Warning banners
    """
    return '''
        * { margin: 0; padding: 0; box-sizing: border-box; }

        body {
            font-family: 'Inter', system-ui, -apple-system, sans-serif;
            background: #0f172a;
            color: #f1f5f9;
        }

        /* Header */
        .header {
            background: linear-gradient(135deg, #1e293b 0%, #0f172a 100%);
            padding: 16px 24px;
            border-bottom: 1px solid #334155;
        }

        .header h1 {
            font-size: 1.5rem;
            font-weight: 700;
            background: linear-gradient(135deg, #00ff88 0%, #00ffff 100%);
            -webkit-background-clip: text;
            -webkit-text-fill-color: transparent;
            background-clip: text;
        }

        .header p { color: #94a3b8; margin-top: 4px; }

        /* Badges */
        .badge {
            display: inline-block;
            background: linear-gradient(135deg, #00ff88 0%, #00ffff 100%);
            color: #000;
            padding: 4px 12px;
            border-radius: 20px;
            font-size: 0.75rem;
            font-weight: 600;
        }

        /* Warnings */
        .warning {
            margin: 16px 24px;
            padding: 12px 16px;
            border: 1px solid #f59e0b;
            border-radius: 8px;
            background: rgba(245, 158, 11, 0.1);
            color: #fbbf24;
        }

        /* Timetable grid */
        .timetable-wrap { padding: 16px 24px; overflow-x: auto; }

        table.timetable {
            border-collapse: collapse;
            font-variant-numeric: tabular-nums;
            font-size: 0.9rem;
        }

        table.timetable th,
        table.timetable td {
            border: 1px solid #334155;
            padding: 6px 10px;
            text-align: center;
            white-space: nowrap;
        }

        table.timetable thead th {
            background: #1e293b;
            position: sticky;
            top: 0;
        }

        table.timetable tbody th { text-align: left; background: #111827; }

        table.timetable tbody tr:hover td { background: rgba(0, 255, 136, 0.08); }
    '''


def get_page_head(title: str, extra_styles: str = "") -> str:
    """
    Generate the HTML <head> section.

    Args:
        title: Page title
        extra_styles: Additional CSS to include

    Returns:
        HTML string for the <head> section
    """
    return f'''<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{escape(title)}</title>
    <link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;600;700&display=swap" rel="stylesheet">
    <style>
        {get_base_styles()}
        {extra_styles}
    </style>
</head>'''


def build_warnings(warnings: List[str]) -> str:
    """Render warning banners."""
    return '\n'.join(f'<div class="warning">⚠️ {escape(w)}</div>' for w in warnings)


def build_table_page(
    title: str,
    table_html: str,
    subtitle: Optional[str] = None,
    warnings: Optional[List[str]] = None,
    extra_styles: str = ""
) -> str:
    """
    Generate a complete HTML page around a rendered table.

    Args:
        title: Page title
        table_html: Table markup (already escaped)
        subtitle: Optional line under the title
        warnings: Messages shown above the table
        extra_styles: Additional CSS styles

    Returns:
        Complete HTML page as string
    """
    head = get_page_head(title, extra_styles)
    subtitle_html = f'<p>{escape(subtitle)}</p>' if subtitle else ''

    return f'''{head}
<body>
    <div class="header">
        <h1>{escape(title)}</h1>
        {subtitle_html}
    </div>
    {build_warnings(warnings or [])}
    <div class="timetable-wrap">
        {table_html}
    </div>
</body>
</html>'''
