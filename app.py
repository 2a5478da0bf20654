import os
from dataclasses import asdict

from flask import Flask, jsonify, request

from webp_pictures import PictureRewriter, RewriterConfig, describe
from webp_pictures.flask_hook import install
from webp_pictures.metadata import lookup_from_settings

app = Flask(__name__)
app.secret_key = os.getenv("SECRET_KEY", "dev-only-change-me")
app.config["MAX_CONTENT_LENGTH"] = int(os.getenv("MAX_UPLOAD_MB", "5")) * 1024 * 1024

rewriter = PictureRewriter(RewriterConfig.from_env(), lookup_from_settings(os.environ))
install(app, rewriter)


@app.get("/health")
def health():
    return jsonify({"status": "ok"})


@app.get("/")
def index():
    return "webp picture rewriter is running", 200, {"Content-Type": "text/plain; charset=utf-8"}


@app.get("/api/status")
def status():
    return jsonify(dict(describe(rewriter.config)))


@app.post("/api/rewrite")
def rewrite_html():
    html = request.get_data(as_text=True)
    if not html.strip():
        return jsonify({"error": "request body must contain HTML"}), 400

    rewritten, stats = rewriter.rewrite_with_stats(html)
    return jsonify({"html": rewritten, "stats": asdict(stats)})


if __name__ == "__main__":
    app.run(host="127.0.0.1", port=8000, debug=True)
