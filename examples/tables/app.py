"""Tables -- nested loops, attributes and globals.

Rows are arrays of cells; each loop iteration binds its own variable
without touching the enclosing scope.

Run:
    python app.py
"""

from brace import Environment

env = Environment(globals={"tableClass": "report"})

template = env.from_string(
    "<table class={ tableClass }>"
    "<caption>{ caption }</caption>"
    "{ for row in rows }<tr>{ for cell in row }<td>{ cell }</td>{ end }</tr>{ end }"
    "</table>"
)

rows = [
    ["Apples", "3"],
    ["Pears & Plums", "5"],
]

output = template.render(caption="Fruit <inventory>", rows=rows)


def main() -> None:
    print(output)


if __name__ == "__main__":
    main()
