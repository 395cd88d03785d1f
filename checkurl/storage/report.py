"""
HTML Report - Static results document with embedded screenshots
"""

import base64
import logging
from html import escape
from pathlib import Path
from typing import Iterable, List, Optional, Union
import aiofiles
from ..result import CheckResult
from ..checker.summary import Summary

logger = logging.getLogger(__name__)

STYLE = """
        body { font-family: Arial, sans-serif; margin: 0; padding: 20px; }
        table { border-collapse: collapse; width: 100%; table-layout: auto; }
        th, td { border: 1px solid #ddd; padding: 8px; text-align: left; vertical-align: top; word-wrap: break-word; }
        th { background-color: #f2f2f2; }
        .screenshot { max-width: 50%; height: auto; cursor: pointer; }
        .fullscreen { position: fixed; top: 0; left: 0; width: 100%; height: 100%;
                      background-color: rgba(0,0,0,0.9); display: flex; justify-content: center;
                      align-items: center; z-index: 1000; }
        .fullscreen img { max-width: 90%; max-height: 90%; object-fit: contain; }
        .summary { background-color: #e6f3ff; padding: 10px; margin-bottom: 20px; border-radius: 5px; }
        .redirected { color: #777; font-size: 0.9em; }
        .url-column { width: 30%; }
        .title-column { width: 30%; }
        .status-column { width: 10%; }
        .screenshot-column { width: 30%; }
"""

VIEWER = """
    <div id="fullscreenContainer" class="fullscreen" style="display: none;" onclick="this.style.display='none';">
        <img id="fullscreenImage" src="" alt="Fullscreen Screenshot">
    </div>
    <script>
        function showFullscreen(img) {
            document.getElementById('fullscreenImage').src = img.src;
            document.getElementById('fullscreenContainer').style.display = 'flex';
        }
    </script>
"""


def _ordered(results: Iterable[CheckResult], order: Optional[List[str]]) -> List[CheckResult]:
    """Sort results by position of their original URL in `order`"""
    results = list(results)
    if not order:
        return results

    position = {}
    for index, url in enumerate(order):
        position.setdefault(url, index)
    return sorted(results, key=lambda r: position.get(r.original_url, len(order)))


def _screenshot_cell(result: CheckResult) -> str:
    if not result.screenshot:
        return "No screenshot available"

    encoded = base64.b64encode(result.screenshot).decode('ascii')
    return (f'<img class="screenshot" src="data:image/png;base64,{encoded}" '
            f'alt="Screenshot" onclick="showFullscreen(this)">')


def _url_cell(result: CheckResult) -> str:
    link = escape(result.final_url, quote=True)
    cell = f'<a href="{link}" target="_blank">{escape(result.final_url)}</a>'
    if result.was_redirected:
        cell += f'<div class="redirected">from {escape(result.original_url)}</div>'
    return cell


def render_summary(summary: Summary) -> str:
    return f"""
    <div class="summary">
        <h2>Summary</h2>
        <p>Total URLs: {summary.total}</p>
        <p>Accessible URLs: {summary.accessible}</p>
        <p>Inaccessible URLs: {summary.inaccessible}</p>
        <p>Redirected URLs: {summary.redirected}</p>
    </div>
"""


def render_report(results: Iterable[CheckResult], summary: Summary,
                  order: Optional[List[str]] = None) -> str:
    """
    Render the results page

    Args:
        results: One result per checked URL
        summary: Counts computed over the same results
        order: Optional original URL order used to sort the rows

    Returns:
        str: Complete HTML document
    """
    rows = []
    inaccessible = []

    for result in _ordered(results, order):
        if not result.accessible:
            inaccessible.append(result.original_url)
            continue

        rows.append(f"""
        <tr>
            <td>{len(rows) + 1}</td>
            <td class="url-column">{_url_cell(result)}</td>
            <td class="title-column">{escape(result.title)}</td>
            <td class="status-column">{result.status_code}</td>
            <td class="screenshot-column">{_screenshot_cell(result)}</td>
        </tr>""")

    parts = [
        "<!DOCTYPE html>\n<html>\n<head>\n    <meta charset=\"utf-8\">\n"
        f"    <title>URL Check Results</title>\n    <style>{STYLE}    </style>\n</head>\n<body>",
        render_summary(summary),
        """    <table>
        <tr>
            <th>#</th>
            <th class="url-column">URL</th>
            <th class="title-column">Title</th>
            <th class="status-column">Status</th>
            <th class="screenshot-column">Screenshot</th>
        </tr>""",
        "".join(rows),
        "\n    </table>\n",
    ]

    if inaccessible:
        items = "".join(f"        <li>{escape(url)}</li>\n" for url in inaccessible)
        parts.append(f"    <h2>Inaccessible URLs</h2>\n    <ol>\n{items}    </ol>\n")

    parts.append(VIEWER)
    parts.append("</body>\n</html>\n")
    return "".join(parts)


async def write_report(path: Union[str, Path], html: str) -> Path:
    """Write the rendered report to disk"""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    async with aiofiles.open(path, 'w', encoding='utf-8') as f:
        await f.write(html)

    logger.info(f"Results saved to {path}")
    return path
