# src/codesnap/utils/tokenizer.py
import threading

import tiktoken

from codesnap.config import COMMAND_TIMEOUT

ENCODINGS = ("cl100k_base", "p50k_base")


class Tokenizer:
    _encoding = None

    @classmethod
    def get_encoding(cls, timeout: float = COMMAND_TIMEOUT):
        """
        Loads the first available encoding.
        tiktoken downloads encodings on first use without a timeout, so the
        load runs in a daemon thread and gives up after `timeout` seconds.
        """
        if cls._encoding is None:
            loaded = {}

            def _load():
                for name in ENCODINGS:
                    try:
                        loaded["encoding"] = tiktoken.get_encoding(name)
                        return
                    except Exception as e:
                        loaded["error"] = e

            worker = threading.Thread(target=_load, daemon=True)
            worker.start()
            worker.join(timeout)

            if "encoding" not in loaded:
                if "error" in loaded:
                    raise loaded["error"]
                raise TimeoutError(f"loading a tiktoken encoding took longer than {timeout}s")
            cls._encoding = loaded["encoding"]
        return cls._encoding

    @staticmethod
    def count(text: str, timeout: float = COMMAND_TIMEOUT) -> int:
        """Estimates how many tokens the snapshot costs a model."""
        try:
            encoding = Tokenizer.get_encoding(timeout)
            return len(encoding.encode(text, disallowed_special=()))
        except Exception:
            # Offline or slow networks fall back to a rough estimate.
            return len(text) // 4
