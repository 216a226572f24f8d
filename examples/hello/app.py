"""Hello World -- the simplest brace example.

Parse a template from a string and render it with context variables.

Run:
    python app.py
"""

from brace import Environment

env = Environment()

# Parse from string
template = env.from_string("<p><b>{ name }</b></p>")

# Render with context
output = template.render(name="World")


def main() -> None:
    print(output)
    print()

    # Multiple renders with different context; values are escaped
    for name in ["Brace", "Fish & Chips", "<script>"]:
        print(template.render(name=name))


if __name__ == "__main__":
    main()
