# src/healthcounters/api/app.py
import os, sys, time, signal, logging
from datetime import datetime, timezone
from pathlib import Path

from flask import Flask, request, jsonify, Response, send_from_directory
from werkzeug.exceptions import HTTPException
from werkzeug.middleware.proxy_fix import ProxyFix
from ..config import settings
from ..counters.days import build_counters, seconds_until_midnight
from .utils import i18n
from .utils.templating import render_file, html_values, js_values

logging.basicConfig(level=settings.LOG_LEVEL, format="%(levelname)s: %(message)s")
log = logging.getLogger("healthcounters.app")

# Pages are rendered by our own {{KEY}} engine, static files by the catch-all route below
app = Flask(__name__, static_folder=None)

if settings.TRUST_PROXY:
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1)
    log.info("Trusting proxy headers (X-Forwarded-*)")

STARTED_AT = time.monotonic()
STATIC_MAX_AGE = 3600

# probe order for /avatar
AVATAR_TYPES = [
    ("png", "image/png"),
    ("jpg", "image/jpeg"),
    ("jpeg", "image/jpeg"),
    ("gif", "image/gif"),
    ("webp", "image/webp"),
    ("svg", "image/svg+xml"),
]

NOT_FOUND_PAGE = """<!DOCTYPE html>
<html>
<head>
    <title>Page Not Found</title>
    <style>
        body { font-family: Arial, sans-serif; text-align: center; padding: 50px; }
        h1 { color: #e74c3c; }
    </style>
</head>
<body>
    <h1>404 - Page Not Found</h1>
    <p>The page you're looking for doesn't exist.</p>
    <a href="/">Return to Dashboard</a>
</body>
</html>
"""


# ---------- Helpers ----------
def config_values(now: datetime | None = None) -> dict:
    """Raw configuration placeholders shared by the page and the script."""
    now = now or datetime.now()
    return {
        "PERSON_NAME": settings.PERSON_NAME,
        "HEALTHY_START_DATE": settings.HEALTHY_START_DATE,
        "DOCTOR_START_DATE": settings.DOCTOR_START_DATE,
        "IS_HEALTHY": settings.IS_HEALTHY,
        "CURRENT_YEAR": now.year,
    }


def page_values(now: datetime | None = None, lang: str = i18n.DEFAULT_LANGUAGE) -> dict:
    """
    Everything index.html can reference:
      - the raw configuration
      - first-paint counter values (the script recomputes them client-side)
      - translated text for `lang` plus both data-en / data-pl variants
    """
    now = now or datetime.now()
    lang = i18n.normalize(lang)
    values = config_values(now)
    values.update(i18n.translation_values(settings.IS_HEALTHY, lang))

    for c in build_counters(now):
        name = c.key.upper()
        values[f"{name}_DAYS"] = c.days
        for code in i18n.LANGUAGES:
            since = f"{i18n.TRANSLATIONS['since'][code]} {i18n.format_date(c.start_date, code)}"
            values[f"{name}_SINCE_{code.upper()}"] = since
        values[f"{name}_SINCE"] = values[f"{name}_SINCE_{lang.upper()}"]

    toggle = i18n.LANGUAGES[i18n.next_language(lang)]
    values["LANG"] = lang
    values["TOGGLE_FLAG"] = toggle["flag"]
    values["TOGGLE_NAME"] = toggle["name"]
    return values


def _client_info():
    client = request.remote_addr or "unknown"
    # X-Forwarded-* only reach these through ProxyFix, i.e. when TRUST_PROXY is on
    protocol = request.scheme
    return client, protocol


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


# ---------- Response headers ----------
@app.after_request
def cache_headers(resp: Response):
    if resp.mimetype == "text/html":
        resp.headers["Cache-Control"] = "no-cache"
    return resp


# ---------- Routes ----------
@app.route("/")
def dashboard():
    lang = i18n.detect_language(request.accept_languages)
    try:
        html = render_file(Path(settings.TEMPLATE_DIR) / "index.html", html_values(page_values(lang=lang)))
    except OSError:
        log.exception("Error serving dashboard")
        return Response("Internal Server Error", status=500, mimetype="text/plain")

    client, protocol = _client_info()
    log.info(f"Dashboard served to {client} via {protocol}")
    return Response(html, mimetype="text/html")


@app.route("/script.js")
def script():
    try:
        js = render_file(Path(settings.STATIC_DIR) / "script.js", js_values(config_values()))
    except OSError:
        log.exception("Error serving script")
        return Response('console.error("Failed to load script");', status=500,
                        mimetype="application/javascript")
    return Response(js, mimetype="application/javascript")


@app.route("/avatar")
def avatar():
    """First avatar.<ext> found in the static dir, in AVATAR_TYPES order."""
    static_dir = Path(settings.STATIC_DIR)
    for ext, mimetype in AVATAR_TYPES:
        path = static_dir / f"avatar.{ext}"
        if not path.is_file():
            continue
        resp = send_from_directory(static_dir, path.name, mimetype=mimetype, max_age=STATIC_MAX_AGE)
        resp.headers["Cache-Control"] = f"public, max-age={STATIC_MAX_AGE}"
        return resp

    log.debug(f"No avatar.* in {static_dir}")
    return Response("Avatar not found", status=404, mimetype="text/plain")


@app.route("/api/counters")
def api_counters():
    """
    Returns {counters: [{key, startDate, days}, ...], isHealthy, nextRefreshSeconds}
    computed with the server clock.
    """
    now = datetime.now()
    return jsonify(
        counters=[c.to_json() for c in build_counters(now)],
        isHealthy=settings.IS_HEALTHY,
        nextRefreshSeconds=round(seconds_until_midnight(now)),
    )


@app.route("/health")
def health():
    return jsonify(
        status="healthy",
        timestamp=_utc_timestamp(),
        personName=settings.PERSON_NAME,
        uptime=time.monotonic() - STARTED_AT,
    )


@app.route("/<path:filename>")
def static_files(filename):
    # send_from_directory refuses paths escaping STATIC_DIR and raises NotFound for missing files
    return send_from_directory(settings.STATIC_DIR, filename, max_age=STATIC_MAX_AGE)


# ---------- Errors ----------
@app.errorhandler(404)
def not_found(_e):
    return Response(NOT_FOUND_PAGE, status=404, mimetype="text/html")


@app.errorhandler(Exception)
def server_error(e):
    if isinstance(e, HTTPException):
        return e
    log.exception("Server error")
    return Response("Internal Server Error", status=500, mimetype="text/plain")


# ---------- Entry point ----------
def _shutdown(signum, _frame):
    log.info(f"Received {signal.Signals(signum).name}, shutting down gracefully...")
    sys.exit(0)


def main():
    settings.validate()
    signal.signal(signal.SIGTERM, _shutdown)
    signal.signal(signal.SIGINT, _shutdown)

    log.info("Health Counters Server Started")
    log.info("=====================================")
    log.info(f"Server: http://localhost:{settings.PORT}")
    log.info(f"Person: {settings.PERSON_NAME}")
    log.info(f"Healthy since: {settings.HEALTHY_START_DATE} (status: {'healthy' if settings.IS_HEALTHY else 'sick'})")
    log.info(f"Doctor visit: {settings.DOCTOR_START_DATE}")
    log.info(f"Static dir: {settings.STATIC_DIR}")
    log.info(f"Trust proxy: {settings.TRUST_PROXY}")
    log.info("=====================================")
    app.run(host=settings.HOST, port=settings.PORT, debug=os.getenv("FLASK_DEBUG") == "1")


if __name__ == "__main__":
    main()
