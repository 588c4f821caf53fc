#!/usr/bin/env python3
"""
Command-line interface for the PromptPage generation pipeline.
"""

import argparse
import json
import sys
from pathlib import Path

from dotenv import load_dotenv

from promptpage.config import Settings
from promptpage.errors import BackendUnavailable, GatewayError, PipelineError
from promptpage.inference.gateway import InferenceGateway
from promptpage.models import GeneratedArtifactSet
from promptpage.pipeline.extraction import compose_preview
from promptpage.pipeline.orchestrator import RequestOrchestrator
from promptpage.utils.llm_logger import get_logger

# Load environment variables
load_dotenv()


def _settings(args) -> Settings:
    settings = Settings.from_env()
    updates = {}
    if getattr(args, "host", None):
        updates["ollama_host"] = args.host.rstrip("/")
    if getattr(args, "model", None):
        updates["model"] = args.model
    if getattr(args, "timeout", None):
        updates["request_timeout"] = args.timeout
    return settings.model_copy(update=updates)


def _read_source(path):
    if not path:
        return ""
    source_path = Path(path)
    if not source_path.exists():
        raise FileNotFoundError(f"File not found: {source_path}")
    return source_path.read_text(encoding="utf-8")


def save_artifacts(artifacts: GeneratedArtifactSet, output_dir: Path) -> Path:
    """Write index.html, style.css, script.js and a combined preview.html."""
    output_dir.mkdir(parents=True, exist_ok=True)
    (output_dir / "index.html").write_text(artifacts.html, encoding="utf-8")
    (output_dir / "style.css").write_text(artifacts.css, encoding="utf-8")
    (output_dir / "script.js").write_text(artifacts.js, encoding="utf-8")
    preview_path = output_dir / "preview.html"
    preview_path.write_text(compose_preview(artifacts), encoding="utf-8")
    return preview_path


def cmd_serve(args):
    """Run the HTTP API."""
    import uvicorn

    settings = Settings.from_env()
    port = args.port or settings.port
    print(f"\n🚀 Server running on port {port}")
    print(f"🔗 Ollama endpoint: {settings.ollama_host}")
    print(f"⚙️  Test health endpoint: curl http://localhost:{port}/api/health\n")
    uvicorn.run("promptpage.api:app", host=args.bind, port=port, reload=args.reload)
    return 0


def cmd_generate(args):
    """Generate HTML/CSS/JS from a requirement."""
    if args.requirement_file:
        requirement = _read_source(args.requirement_file)
    else:
        requirement = args.requirement or ""

    settings = _settings(args)
    print(f"🤖 Using ollama/{settings.model} at {settings.ollama_host}", file=sys.stderr)

    orchestrator = RequestOrchestrator.from_settings(settings)
    try:
        result = orchestrator.handle(requirement)
    finally:
        orchestrator.close()

    print(json.dumps(result.model_dump(), indent=2))

    if args.output:
        artifacts = GeneratedArtifactSet(html=result.html, css=result.css, js=result.js)
        preview_path = save_artifacts(artifacts, Path(args.output))
        print(f"✅ Sources saved to: {args.output}", file=sys.stderr)
        print(f"📄 Preview: {preview_path}", file=sys.stderr)

    return 0


def cmd_validate(args):
    """Validate existing HTML/CSS/JS files."""
    html = _read_source(args.html)
    css = _read_source(args.css)
    js = _read_source(args.js)

    orchestrator = RequestOrchestrator.from_settings(_settings(args))
    try:
        validation = orchestrator.validate_only(html, css, js)
    finally:
        orchestrator.close()

    print(validation)
    return 0


def cmd_health(args):
    """Check that the backend is up and the model is pulled."""
    settings = _settings(args)
    with InferenceGateway.from_settings(settings) as gateway:
        if not gateway.check_available():
            print(f"❌ Ollama service unavailable at {settings.ollama_host}")
            print(f"   1. Ensure Ollama is running\n   2. Run: ollama pull {settings.model}")
            return 2
        models = gateway.list_models()

    print(f"✅ Ollama service is healthy: {settings.ollama_host}")
    if any(name == settings.model or name.split(":")[0] == settings.model for name in models):
        print(f"✅ Model ready: {settings.model}")
    else:
        print(f"⚠️  Model not pulled: {settings.model} (run: ollama pull {settings.model})")
        return 1
    return 0


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Generate HTML/CSS/JS from free-text requirements with a local Ollama model",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument("--log-level", choices=["NONE", "INFO", "DEBUG", "TRACE"],
                        help="LLM call log level (default: LLM_DEBUG_LEVEL)")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--bind", default="0.0.0.0", help="Bind address")
    serve_parser.add_argument("--port", type=int, help="Port (default: PROMPTPAGE_PORT or 5001)")
    serve_parser.add_argument("--reload", action="store_true", help="Reload on code changes")

    backend_options = argparse.ArgumentParser(add_help=False)
    backend_options.add_argument("--host", help="Ollama base URL (default: OLLAMA_HOST)")
    backend_options.add_argument("--model", help="Model name (default: PROMPTPAGE_MODEL)")
    backend_options.add_argument("--timeout", type=float, help="Per-call deadline in seconds")

    # Generate command
    gen_parser = subparsers.add_parser("generate", parents=[backend_options],
                                       help="Generate code from a requirement")
    source = gen_parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--requirement", "-r", help="Requirement text")
    source.add_argument("--requirement-file", "-f", help="File containing the requirement")
    gen_parser.add_argument("--output", "-o", help="Directory to write sources and preview.html")

    # Validate command
    val_parser = subparsers.add_parser("validate", parents=[backend_options],
                                       help="Validate existing code")
    val_parser.add_argument("--html", help="Path to HTML file")
    val_parser.add_argument("--css", help="Path to CSS file")
    val_parser.add_argument("--js", help="Path to JavaScript file")

    # Health command
    subparsers.add_parser("health", parents=[backend_options], help="Check backend availability")

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    if args.log_level:
        get_logger().configure(level=args.log_level)

    try:
        if args.command == "serve":
            return cmd_serve(args)
        elif args.command == "generate":
            return cmd_generate(args)
        elif args.command == "validate":
            return cmd_validate(args)
        elif args.command == "health":
            return cmd_health(args)
    except KeyboardInterrupt:
        print("\n\n⚠️  Interrupted by user")
        return 130
    except BackendUnavailable as e:
        print(f"❌ {e.message}")
        return 2
    except (PipelineError, GatewayError, FileNotFoundError) as e:
        print(f"❌ Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
