"""Presentation stylesheets emitted alongside rendered fragments.

The renderer appends CODE_STYLE after the first code block and LIST_STYLE
after the first list of each render when ``embed_styles`` is enabled.
Token colors target the ``token CATEGORY`` classes the highlighter emits.
"""

CODE_STYLE = """<style>
pre {
  display: flex;
  flex-direction: column;
  justify-content: center;
  background: #282c34;
  color: #abb2bf;
  padding: 1rem;
  border-radius: 5px;
  overflow-x: auto;
}
pre code {
  font-family: "Fira Code", monospace;
  font-size: 14px;
  background: initial;
  color: white;
  line-height: 1.5;
}
.token.keyword { color: #c678dd; }
.token.function { color: #61afef; }
.token.string { color: #ce9178; }
.token.comment { color: #7c858d; }
.token.number { color: #b5cea8; }
.token.boolean { color: #569cd6; }
.token.type { color: #4ec9b0; }
.token.class { color: #4ec9b0; }
.token.punctuation { color: #abb2bf; }
</style>"""

LIST_STYLE = """<style>
ul, ol {
  display: block;
  margin-block-start: 1em;
  margin-block-end: 1em;
  padding-inline-start: 40px;
  unicode-bidi: isolate;
}
ul { list-style-type: disc; }
ol { list-style-type: decimal; }
ul ul { list-style-type: circle; }
ul ul ul { list-style-type: square; }
ol ol { list-style-type: lower-alpha; }
ol ol ol { list-style-type: lower-roman; }
</style>"""
