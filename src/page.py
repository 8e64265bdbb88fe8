# ABOUTME: HTML shell for the single tracker page and its loading placeholder.
# ABOUTME: The inline script polls the dashboard endpoint and posts user actions back as JSON.

from html import escape

from src.presets import CLOTHING_PRESETS, SUNSCREEN_PRESETS

TITLE = "UV & Vitamin D Tracker"

LOADING_HTML = f"""<!doctype html>
<html lang="en"><head><meta charset="utf-8"><title>{escape(TITLE)}</title>
<meta http-equiv="refresh" content="1"></head>
<body><main><p>Loading your sun profile&hellip;</p></main></body></html>
"""

_SCRIPT = """
const $ = (id) => document.getElementById(id);

async function send(method, path, body) {
  const resp = await fetch(path, {
    method,
    headers: {"content-type": "application/json"},
    body: body === undefined ? undefined : JSON.stringify(body),
  });
  if (resp.ok) render(await resp.json());
}

function render(d) {
  $("base-uv").textContent = d.baseUv.toFixed(1);
  $("risk").textContent = d.risk;
  $("sunrise").textContent = d.sunWindow.sunrise;
  $("sunset").textContent = d.sunWindow.sunset;
  $("forecast").innerHTML = d.forecast
    .map((e) => `<li><span>${e.hour}</span> <strong>${e.uv.toFixed(1)}</strong></li>`)
    .join("");
  $("clock").textContent = d.session.clock;
  $("effective-uv").textContent = d.session.effectiveUv.toFixed(1);
  $("session-gain").textContent = `${d.session.vitaminGain.toFixed(0)} IU`;
  $("progress-bar").style.width = `${d.progressPercentage}%`;
  $("progress-text").textContent = `${d.state.vitaminProgress} IU / ${d.state.vitaminGoal} IU`;
  for (const [id, key] of [["location", "location"], ["clothing", "clothing"],
                           ["sunscreen", "sunscreen"], ["vitamin-goal", "vitaminGoal"]]) {
    if (document.activeElement !== $(id)) $(id).value = d.state[key];
  }
}

$("location").addEventListener("input", (e) => send("PATCH", "/api/state", {location: e.target.value}));
$("clothing").addEventListener("change", (e) => send("PATCH", "/api/state", {clothing: e.target.value}));
$("sunscreen").addEventListener("change", (e) => send("PATCH", "/api/state", {sunscreen: e.target.value}));
$("vitamin-goal").addEventListener("input", (e) => send("PATCH", "/api/state", {vitaminGoal: e.target.value}));
for (const btn of document.querySelectorAll("button[data-action]")) {
  btn.addEventListener("click", () => send("POST", btn.dataset.action));
}

async function poll() {
  const resp = await fetch("/api/dashboard");
  if (resp.ok) render(await resp.json());
}
poll();
setInterval(poll, 1000);
"""


def _options(presets) -> str:
    return "".join(f'<option value="{key.value}">{escape(p.label)}</option>' for key, p in presets.items())


def render_page() -> str:
    """Render the page shell; live values are filled in by the script."""
    return f"""<!doctype html>
<html lang="en">
<head><meta charset="utf-8"><meta name="viewport" content="width=device-width, initial-scale=1">
<title>{escape(TITLE)}</title>
<style>
  body {{ font-family: system-ui, sans-serif; background: #0b1120; color: #f8fafc;
         margin: 0 auto; max-width: 60rem; padding: 2rem; }}
  section {{ background: rgba(255,255,255,.08); border-radius: 1rem; padding: 1.5rem; margin-bottom: 1.5rem; }}
  #forecast {{ display: flex; gap: 1rem; list-style: none; padding: 0; }}
  .bar {{ background: rgba(255,255,255,.2); border-radius: 1rem; height: .75rem; overflow: hidden; }}
  #progress-bar {{ background: #facc15; height: 100%; width: 0; }}
</style></head>
<body>
<h1>{escape(TITLE)}</h1>
<section>
  <h2>Today's UV</h2>
  <p><strong id="base-uv">-</strong> <span id="risk"></span></p>
  <label for="location">Location</label> <input id="location" type="text">
  <p>Sunrise <span id="sunrise"></span> &middot; Sunset <span id="sunset"></span></p>
  <ul id="forecast"></ul>
</section>
<section>
  <h2>Exposure Session</h2>
  <p id="clock">00:00:00</p>
  <button data-action="/api/session/start">Start</button>
  <button data-action="/api/session/stop">Stop</button>
  <button data-action="/api/session/reset">Reset</button>
  <p>Effective UV <span id="effective-uv"></span> &middot; Estimated D3 gain <span id="session-gain"></span></p>
</section>
<section>
  <h2>Exposure Profile</h2>
  <label for="clothing">Clothing coverage</label> <select id="clothing">{_options(CLOTHING_PRESETS)}</select>
  <label for="sunscreen">Sunscreen</label> <select id="sunscreen">{_options(SUNSCREEN_PRESETS)}</select>
</section>
<section>
  <h2>Vitamin D3 Goal</h2>
  <label for="vitamin-goal">Daily goal (IU)</label> <input id="vitamin-goal" type="number" min="0" step="50">
  <div class="bar"><div id="progress-bar"></div></div>
  <p id="progress-text"></p>
  <button data-action="/api/progress/decrement">-100 IU</button>
  <button data-action="/api/progress/increment">+100 IU</button>
  <button data-action="/api/progress/reset">Reset Progress</button>
</section>
<script>{_SCRIPT}</script>
</body></html>
"""
