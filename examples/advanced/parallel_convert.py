"""Thread safe — convert 1000 docs in parallel with one shared converter."""

from concurrent.futures import ThreadPoolExecutor

from markyfy import Markyfy

md = Markyfy(embed_styles=False)
docs = ["# Doc " + str(i) + "\n\nContent for document " + str(i) for i in range(1000)]

with ThreadPoolExecutor(max_workers=8) as ex:
    results = list(ex.map(md, docs))

print(f"Converted {len(results)} documents in parallel")
print("First doc:", results[0])
print("Last doc:", results[-1])
