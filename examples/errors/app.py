"""Error reporting -- located parse and evaluation errors.

Both phases fail fast and point at the exact source position: parse
errors at the failing character, evaluation errors at the failing
sub-expression. Colors are enabled in a TTY and respect NO_COLOR.

Run:
    python app.py
"""

from brace import Environment, TemplateError

env = Environment()

SOURCES = {
    "unclosed.html": "<ul>{ for item in items }<li>{ item }</li>{ end }",
    "typo.html": "<section><h1>{ titel }</h1></section>",
    "attribute.html": "<a href={ links }>{ title }</a>",
}

CONTEXT = {"title": "Brace", "items": ["a"], "links": ["/a", "/b"]}


def collect_errors() -> dict[str, TemplateError]:
    """Render every sample and return the error each one raises."""
    errors: dict[str, TemplateError] = {}
    for name, source in SOURCES.items():
        try:
            env.from_string(source, name=name).render(CONTEXT)
        except TemplateError as e:
            errors[name] = e
    return errors


errors = collect_errors()


def main() -> None:
    for error in errors.values():
        print(error.format_compact())
        print()


if __name__ == "__main__":
    main()
