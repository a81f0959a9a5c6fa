"""Highlight your own language — a few regex rules per converter."""

from markyfy import LanguageDefinition, Markyfy

python = LanguageDefinition.from_patterns(
    "python",
    [
        (r"#.*$", "comment"),
        (r"\b(?:def|return|if|else|for|in|import)\b", "keyword"),
        (r"\b\d+\b", "number"),
        (r"\b(?:True|False|None)\b", "boolean"),
    ],
)

md = Markyfy(embed_styles=False)
md.register_language("python", python)
md.register_language("py", python)

source = """
```py
def answer():
    return 42  # always
```
"""

print(md(source))
