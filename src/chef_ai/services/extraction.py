"""Recovery of JSON objects embedded in free-text model output."""

import json

from chef_ai.domain.errors import ExtractionError

_DECODER = json.JSONDecoder()


def extract_json_object(raw_text: str) -> str:
    """Return the text of the first JSON object embedded in ``raw_text``.

    Each ``{`` is tried as the start of a JSON value, so braces inside string
    literals and prose around the object (markdown fences, commentary) do not
    affect the result. When nothing decodes, the span from the first ``{`` to
    the last ``}`` is returned unparsed and validation reports the error.
    """
    start = raw_text.find("{")
    end = raw_text.rfind("}")
    if start == -1 or end < start:
        raise ExtractionError("Could not parse JSON from response")

    candidate = start
    while candidate != -1:
        try:
            value, stop = _DECODER.raw_decode(raw_text, candidate)
        except json.JSONDecodeError:
            pass
        else:
            if isinstance(value, dict):
                return raw_text[candidate:stop]
        candidate = raw_text.find("{", candidate + 1)

    return raw_text[start : end + 1]
