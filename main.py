import argparse, os, sys, yaml, requests
from pathlib import Path
from dotenv import load_dotenv
from bullets import segment, sentence_bullets
from manipulation import OUTPUT_FORMATS, extract_article, render_bullets, token_trim

BASE = Path(__file__).resolve().parent
MODES = {"bullets": segment, "sentences": sentence_bullets}

DEFAULTS = {
    "mode": "bullets",
    "fetch": {"timeout": 20, "user_agent": "Mozilla/5.0"},
    "output": {"format": "text", "max_bullets": 0},
}

def log(*args):
    print(">>", *args, file=sys.stderr, flush=True)

def normalize_config(raw) -> dict:
    """Merge a parsed config.yaml over DEFAULTS and validate the choices."""
    cfg = {k: (v.copy() if isinstance(v, dict) else v) for k, v in DEFAULTS.items()}
    if isinstance(raw, dict):
        for k, v in raw.items():
            if isinstance(cfg.get(k), dict):
                if v is None:
                    continue
                if not isinstance(v, dict):
                    raise ValueError(f"config section {k!r} must be a mapping, got {v!r}")
                cfg[k].update(v)
            elif v is not None:
                cfg[k] = v
    if os.getenv("BULLETS_USER_AGENT"):
        cfg["fetch"]["user_agent"] = os.getenv("BULLETS_USER_AGENT")

    if cfg["mode"] not in MODES:
        raise ValueError(f"unknown mode: {cfg['mode']!r} (expected one of {', '.join(MODES)})")
    if cfg["output"]["format"] not in OUTPUT_FORMATS:
        raise ValueError(f"unknown output format: {cfg['output']['format']!r}")
    cfg["output"]["max_bullets"] = int(cfg["output"].get("max_bullets") or 0)
    return cfg

def load_config(path=None) -> dict:
    path = Path(path or os.getenv("BULLETS_CONFIG") or BASE / "config.yaml")
    if not path.exists():
        log(f"No config at {path}, using defaults")
        return normalize_config(None)
    return normalize_config(yaml.safe_load(path.read_text(encoding="utf-8")))

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="bullet-segment",
        description="Re-flow generated news prose into a list of bullet points.",
    )
    p.add_argument("file", nargs="?", default="-", help="input text file ('-' for stdin)")
    p.add_argument("--url", help="fetch and segment an article instead of reading a file")
    p.add_argument("--mode", choices=sorted(MODES))
    p.add_argument("--format", dest="fmt", choices=OUTPUT_FORMATS)
    p.add_argument("--max", dest="max_bullets", type=int, help="keep at most N bullets")
    p.add_argument("--config", help="path to config.yaml")
    return p

def read_input(args, cfg) -> str:
    if args.url:
        fetch = cfg["fetch"]
        log(f"GET {args.url} (timeout {fetch['timeout']}s)")
        return extract_article(args.url, timeout=fetch["timeout"], user_agent=fetch["user_agent"])
    if args.file == "-":
        return sys.stdin.read()
    return Path(args.file).read_text(encoding="utf-8")

def main(argv=None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)

    try:
        cfg = load_config(args.config)
    except (ValueError, yaml.YAMLError) as e:
        log(f"config error: {e}")
        return 2
    if args.mode:
        cfg["mode"] = args.mode
    if args.fmt:
        cfg["output"]["format"] = args.fmt
    if args.max_bullets is not None:
        cfg["output"]["max_bullets"] = args.max_bullets

    try:
        text = read_input(args, cfg)
    except requests.exceptions.Timeout:
        log(f"timeout: {args.url}")
        return 1
    except requests.exceptions.SSLError as se:
        log(f"SSL error: {args.url} -> {se}")
        return 1
    except requests.exceptions.RequestException as rexc:
        log(f"HTTP error: {args.url} -> {rexc}")
        return 1
    except (OSError, UnicodeDecodeError) as e:
        log(f"read error: {args.file} -> {e}")
        return 1

    log(f"Input: {len(text)} chars :: {token_trim(' '.join(text.split()), 60)!r}")
    bullets = MODES[cfg["mode"]](text)
    limit = cfg["output"]["max_bullets"]
    if limit > 0:
        bullets = bullets[:limit]
    log(f"{cfg['mode']}: {len(bullets)} bullet(s)")

    sys.stdout.write(render_bullets(bullets, cfg["output"]["format"]))
    return 0

if __name__ == "__main__":
    sys.exit(main())
