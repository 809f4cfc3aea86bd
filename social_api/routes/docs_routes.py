from flask import Blueprint, current_app, jsonify, render_template_string, url_for

from social_api.openapi import build_spec


docs_bp = Blueprint("docs", __name__)

SWAGGER_UI_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>{{ title }}</title>
  <link rel="stylesheet" href="https://unpkg.com/swagger-ui-dist@5/swagger-ui.css">
</head>
<body>
  <div id="swagger-ui"></div>
  <script src="https://unpkg.com/swagger-ui-dist@5/swagger-ui-bundle.js"></script>
  <script>
    window.ui = SwaggerUIBundle({url: "{{ spec_url }}", dom_id: "#swagger-ui"});
  </script>
</body>
</html>
"""


@docs_bp.route("/swagger/doc.json", methods=["GET"])
def openapi_document():
    return jsonify(build_spec(current_app).to_dict()), 200


@docs_bp.route("/swagger/", methods=["GET"])
def swagger_ui():
    return render_template_string(
        SWAGGER_UI_PAGE,
        title=current_app.config["API_TITLE"],
        spec_url=url_for("docs.openapi_document"),
    )
