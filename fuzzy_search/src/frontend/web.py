# frontend/web.py
from __future__ import annotations

import argparse
import logging

from flask import Flask, Response, jsonify, request

from fuzzymatch.cli import add_engine_args, engine_from_args
from fuzzymatch.engine import Engine
from fuzzymatch.errors import FuzzyMatchError

log = logging.getLogger(__name__)

app = Flask(__name__)
_engine: Engine | None = None

# ---------- API ----------
@app.get("/api/search")
def api_search():
    q = request.args.get("q", "", type=str)
    if not q.strip():
        return jsonify({"type": "matches", "results": []})
    if _engine is None:
        return jsonify({"error": "engine not initialized"}), 503
    # the browser debounces keystrokes; each request is one settled query
    try:
        outcome = _engine.lookup(q)
    except FuzzyMatchError as exc:
        log.warning("Search for %r failed: %s", q, exc)
        return jsonify({"error": str(exc)}), 500
    return jsonify(outcome.to_dict())


@app.get("/health")
def health():
    if _engine is None:
        return jsonify({"ok": False, "records": 0}), 503
    return jsonify({"ok": True, "records": _engine.index.count()})


# ---------- UI ----------
@app.get("/")
def home():
    # single static page; the browser debounces and calls /api/search
    html = r"""
<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8" />
<meta name="viewport" content="width=device-width,initial-scale=1" />
<title>Fuzzy Search</title>
<style>
:root{
  --page:#f6f7f9; --sheet:#ffffff; --text:#1f2933; --dim:#6b7785;
  --focus:#2f6fed; --line:#e3e7ec; --hint:#fff7e0;
}
*{box-sizing:border-box}
body{ margin:0; background:var(--page); color:var(--text); font:15px/1.5 system-ui,sans-serif }
main{ max-width:720px; margin:40px auto; padding:0 16px }
section{ background:var(--sheet); border:1px solid var(--line); border-radius:10px; padding:20px }
h1{ font-size:18px; margin:0 0 12px }
#q{ width:100%; padding:10px 12px; font-size:15px; border:1px solid var(--line); border-radius:8px }
#q:focus{ outline:2px solid var(--focus); border-color:transparent }
#status{ color:var(--dim); font-size:13px; margin:8px 0 }
#status.suggest{ background:var(--hint); padding:4px 8px; border-radius:6px; color:var(--text) }
table{ width:100%; border-collapse:collapse }
th, td{ text-align:left; padding:8px 6px; border-bottom:1px solid var(--line) }
th{ color:var(--dim); font-weight:500; font-size:13px }
td.id{ color:var(--dim); width:5rem }
.tag{ display:inline-block; margin-left:6px; padding:0 6px; font-size:12px;
      border:1px solid var(--line); border-radius:999px; color:var(--dim) }
</style>
</head>
<body>
  <main>
    <section>
      <h1>Fuzzy Search</h1>
      <input id="q" type="search" placeholder="Search records…" autocomplete="off" autofocus />
      <div id="status">Type to search.</div>
      <table>
        <thead><tr><th>Id</th><th>Name</th></tr></thead>
        <tbody id="rows"></tbody>
      </table>
    </section>
  </main>
<script>
const box = document.getElementById("q");
const rowsEl = document.getElementById("rows");
const status = document.getElementById("status");
const esc = (s) => String(s).replace(/[&<>"]/g, (c) => ({"&":"&amp;","<":"&lt;",">":"&gt;",'"':"&quot;"}[c]));

let timer = null;
let latest = 0; // responses of older requests are ignored

function show(text, hint){
  status.textContent = text;
  status.className = hint ? "suggest" : "";
}

async function runSearch(){
  const query = box.value.trim();
  if(!query){ rowsEl.innerHTML = ""; show("Type to search."); return; }
  const ticket = ++latest;
  const resp = await fetch(`/api/search?q=${encodeURIComponent(query)}`);
  const body = await resp.json();
  if(ticket !== latest) return;
  if(!resp.ok){ rowsEl.innerHTML = ""; show(`Error: ${body.error ?? resp.status}`); return; }

  const found = body.type === "matches";
  const items = found ? body.results : body.suggestions;
  show(found ? `${items.length} match(es)` : body.message, !found);
  rowsEl.innerHTML = items.map((r) =>
    `<tr><td class="id">${esc(r.id)}</td><td>${esc(r.name)}` +
    r.tags.map((t) => `<span class="tag">${esc(t)}</span>`).join("") + `</td></tr>`
  ).join("");
}

box.addEventListener("input", () => {
  clearTimeout(timer);
  timer = setTimeout(runSearch, 300);
});
</script>
</body>
</html>
"""
    return Response(html, mimetype="text/html")


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Run Flask UI on top of the fuzzy search Engine")
    add_engine_args(ap)
    ap.add_argument("--host", default="127.0.0.1")
    ap.add_argument("--port", type=int, default=8000)
    args = ap.parse_args(argv)

    global _engine
    _engine = engine_from_args(args)
    try:
        app.run(host=args.host, port=args.port, debug=args.verbose)
    finally:
        _engine.shutdown()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
