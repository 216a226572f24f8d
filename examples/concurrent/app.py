"""Concurrent rendering -- one template shared by 8 threads.

Templates, trees and contexts are immutable and evaluation keeps only
local state, so a single Template renders from many threads at once with
no cross-contamination between simultaneous renders.

Run:
    python app.py
"""

from concurrent.futures import ThreadPoolExecutor

from brace import Environment

env = Environment()

TEMPLATE_SOURCE = (
    "<article id={ pageId }>"
    "<h1>{ title }</h1>"
    "<ul>{ for tag in tags }<li>{ tag }</li>{ end }</ul>"
    "</article>"
)

template = env.from_string(TEMPLATE_SOURCE)

pages = [
    {"pageId": f"page-{i}", "title": f"Page {i}", "tags": [f"tag-{i}-a", f"tag-{i}-b", f"tag-{i}-c"]}
    for i in range(8)
]


def render_page(page: dict) -> str:
    """Render a single page -- called from a worker thread."""
    return template.render(page)


with ThreadPoolExecutor(max_workers=8) as pool:
    results = list(pool.map(render_page, pages))

output = "\n".join(results)


def main() -> None:
    print(f"Rendered {len(results)} pages across 8 threads:\n")
    for i, html in enumerate(results):
        print(f"--- Thread {i} ---")
        print(html)
        print()


if __name__ == "__main__":
    main()
