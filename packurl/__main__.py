import os
import sys

from typing import Optional

from .codec.error import Q85Error
from .codec.q85 import q85_decode, q85_encode
from .packer import PackError, pack, unpack


def max_length_from_env() -> Optional[int]:
    value = os.environ.get("PACKURL_MAX_LENGTH")
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        raise SystemExit(f"Invalid PACKURL_MAX_LENGTH: {value}") from None


def run_action(action: str, data: bytes) -> bytes:
    if action == "encode":
        return q85_encode(data).encode("ascii") + b"\n"
    elif action == "decode":
        return q85_decode(data.strip())
    elif action == "pack":
        return pack(data).encode("ascii") + b"\n"
    elif action == "unpack":
        return unpack(data.strip(), max_length=max_length_from_env())
    raise SystemExit(f"Unsupported action {action}")


def main(argv=None, stdin=None, stdout=None):
    if argv is None:
        argv = sys.argv[1:]
    if not argv:
        raise SystemExit("Missing required arguments (action)")
    action = argv[0]
    if action not in ("encode", "decode", "pack", "unpack"):
        raise SystemExit(f"Unsupported action {action}")
    if len(argv) > 1 and argv[1] != "-":
        try:
            with open(argv[1], "rb") as f:
                data = f.read()
        except OSError as ex:
            raise SystemExit(f"Cannot read {argv[1]}: {ex.strerror}") from None
    else:
        data = (stdin or sys.stdin.buffer).read()
    try:
        result = run_action(action, data)
    except (Q85Error, PackError) as ex:
        raise SystemExit(f"{action} failed: {ex}") from None
    if os.environ.get("PACKURL_VERBOSE"):
        print(f"{action}: {len(data)} -> {len(result)} bytes", file=sys.stderr)
    out = stdout or sys.stdout.buffer
    out.write(result)
    out.flush()


if __name__ == "__main__":
    main()
