"""Convert Markdown in 3 lines — zero config, zero deps."""

from markyfy import convert

html = convert("# Hello **World**\n\n- one\n- two")
print(html)
