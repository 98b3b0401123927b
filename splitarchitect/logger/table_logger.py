"""Table display functionality for logs.

Renders small tables (split orderings, insertion traces) for terminal and HTML
logs.
"""

import html
from typing import Any, List, Optional, Sequence
from tabulate import tabulate
from splitarchitect.logger.base_logger import AlgorithmLogger


class TableLogger(AlgorithmLogger):
    """Extension of AlgorithmLogger with table support."""

    def table(
        self,
        data: List[List[Any]],
        headers: Optional[List[str]] = None,
        title: Optional[str] = None,
        tablefmt: str = "grid",
        colalign: Optional[Sequence[Optional[str]]] = None,
    ) -> None:
        """Display data as a formatted table."""
        if self.disabled:
            return

        if headers is None:
            headers = []

        if title:
            self.logger.info(f"\n{title}:")

        if tablefmt == "html":
            if title:
                self._html_content.append(f"<h4>{html.escape(title)}</h4>")
            self.raw_html(self._create_html_table(data, headers))
        else:
            ascii_table = tabulate(
                data,
                headers=headers,
                tablefmt=tablefmt,
                colalign=colalign,
                showindex=False,
            )
            self.logger.info(ascii_table)
            if title:
                self._html_content.append(f"<h4>{html.escape(title)}</h4>")
            self._html_content.append(
                f'<pre class="tree-view">{html.escape(ascii_table)}</pre>'
            )

    def _create_html_table(self, data: List[List[Any]], headers: List[str]) -> str:
        html_parts = ['<div class="table-container">', "<table>"]

        if headers:
            html_parts.append("<thead><tr>")
            for header in headers:
                html_parts.append(f"<th>{html.escape(str(header))}</th>")
            html_parts.append("</tr></thead>")

        html_parts.append("<tbody>")
        for row in data:
            html_parts.append("<tr>")
            for cell in row:
                html_parts.append(f"<td>{html.escape(str(cell))}</td>")
            html_parts.append("</tr>")
        html_parts.append("</tbody>")

        html_parts.append("</table>")
        html_parts.append("</div>")

        return "\n".join(html_parts)
