"""
Flask-based Web API for README Wizard.

Exposes the field layouts and the renderer over HTTP so editors and other
front ends can drive the same templates as the terminal wizard.

Endpoints:
    GET  /api/health          - Health check endpoint
    GET  /api/variants        - Names of the available field layouts
    GET  /api/variants/<name> - Fields, descriptions and licenses of a layout
    POST /api/render          - Render a preview or final README
"""

from typing import Any

from flask import Flask, Response, jsonify, request

from readmewizard import __version__
from readmewizard.renderer import RenderOptions, render_readme
from readmewizard.schema import FieldRegistry, LicenseCatalog
from readmewizard.variants import DEFAULT_VARIANT, VARIANTS, Variant, get_variant

app = Flask(__name__)
app.config["MAX_CONTENT_LENGTH"] = 1 * 1024 * 1024  # 1MB max request


def variant_to_dict(variant: Variant) -> dict[str, Any]:
    """Convert a layout to a JSON-serializable dictionary."""
    return {
        "name": variant.name,
        "title": variant.title,
        "fields": [
            {
                "name": spec.name,
                "description": spec.description,
                "kind": spec.kind.value,
                "placeholder": spec.build().placeholder,
            }
            for spec in variant.fields
        ],
        "licenses": list(variant.licenses),
        "default_license": variant.licenses[0],
    }


def build_fields(variant: Variant, values: Any) -> FieldRegistry:
    """
    Create the layout's fields and fill them from a {name: value} mapping.

    Raises:
        ValueError: If values is not a mapping, names an unknown field,
            or holds a non-string value
    """
    if values is None:
        values = {}
    if not isinstance(values, dict):
        raise ValueError("'fields' must be an object mapping field names to values")

    fields = variant.create_fields()
    for name, value in values.items():
        if name not in fields.names:
            raise ValueError(f"Unknown field for variant '{variant.name}': {name}")
        if not isinstance(value, str):
            raise ValueError(f"Value of field '{name}' must be a string")
        fields.set_value(name, value)
    return fields


def build_licenses(variant: Variant, choice: Any) -> LicenseCatalog:
    """
    Create the layout's license catalog and apply the requested selection.

    Raises:
        ValueError: If the choice is not a known license name or index
    """
    licenses = variant.create_licenses()
    if choice is None:
        return licenses
    if isinstance(choice, bool) or not isinstance(choice, (int, str)):
        raise ValueError("'license' must be a license name or index")
    licenses.select(choice)
    return licenses


def read_flag(data: dict[str, Any], key: str, default: bool) -> bool:
    """
    Read an optional boolean option from a JSON body.

    Raises:
        ValueError: If the value is present but not a JSON boolean
    """
    value = data.get(key, default)
    if not isinstance(value, bool):
        raise ValueError(f"'{key}' must be true or false")
    return value


@app.route("/api/health", methods=["GET"])
def health_check() -> Response:
    """Health check endpoint."""
    return jsonify({"status": "healthy", "version": __version__})


@app.route("/api/variants", methods=["GET"])
def list_variants() -> Response:
    """List the available field layouts."""
    return jsonify({"variants": sorted(VARIANTS), "default": DEFAULT_VARIANT})


@app.route("/api/variants/<name>", methods=["GET"])
def describe_variant(name: str) -> tuple[Response, int]:
    """Describe one field layout."""
    try:
        variant = get_variant(name)
    except ValueError as e:
        return jsonify({"error": str(e)}), 404
    return jsonify(variant_to_dict(variant)), 200


@app.route("/api/render", methods=["POST"])
def render() -> tuple[Response, int]:
    """
    Render a README from field values.

    JSON body:
        - variant: layout name (default: the default layout)
        - fields: {field name: value}; omitted fields are empty
        - license: license name or index (default: first license)
        - final: bool (default: false); requires every field to be filled
        - include_badges: bool (default: true)
        - include_toc: bool (default: true)

    Returns:
        JSON response with:
            - readme: The rendered README content
            - complete: Whether every field is filled
            - missing: Names of empty fields
            - license: The license used
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "Request body must be a JSON object"}), 400

    try:
        variant = get_variant(str(data.get("variant", DEFAULT_VARIANT)))
        fields = build_fields(variant, data.get("fields"))
        licenses = build_licenses(variant, data.get("license"))
        final = read_flag(data, "final", False)
        options = RenderOptions(
            include_badges=read_flag(data, "include_badges", True),
            include_toc=read_flag(data, "include_toc", True),
        )
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    missing = fields.missing_fields()
    if final and missing:
        return (
            jsonify(
                {
                    "error": "All fields must be filled to render the final README",
                    "missing": missing,
                }
            ),
            400,
        )

    readme_content = render_readme(fields, licenses.selected, final=final, options=options)

    return (
        jsonify(
            {
                "success": True,
                "readme": readme_content,
                "complete": not missing,
                "missing": missing,
                "license": licenses.selected,
            }
        ),
        200,
    )


@app.errorhandler(404)
def not_found(error):
    """Handle unknown routes."""
    return jsonify({"error": "Not found"}), 404


@app.errorhandler(413)
def request_entity_too_large(error):
    """Handle request too large errors."""
    return jsonify({"error": "Request too large. Maximum size is 1MB."}), 413


@app.errorhandler(500)
def internal_server_error(error):
    """Handle internal server errors."""
    return jsonify({"error": "Internal server error"}), 500


def create_app() -> Flask:
    """
    Application factory for creating the Flask app.

    This allows for easier testing and configuration.

    Returns:
        Configured Flask application instance.
    """
    return app


def main() -> None:
    """Run the development server."""
    print("Starting README Wizard API server...")
    print()
    print("API Endpoints:")
    print("  GET  /api/variants        - Available field layouts")
    print("  GET  /api/variants/<name> - Fields and licenses of a layout")
    print("  POST /api/render          - Render a preview or final README")
    print("  GET  /api/health          - Health check")
    print()
    app.run(host="127.0.0.1", port=5001, debug=False)


if __name__ == "__main__":
    main()
