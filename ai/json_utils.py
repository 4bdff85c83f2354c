"""Sanitize and parse JSON from LLM responses.

LLMs asked for raw JSON still wrap it in markdown fences, add a sentence
before or after it, or write JavaScript-style object literals. sanitize()
rewrites the text in a fixed sequence of regex passes:

    1. trim whitespace
    2. drop ```json / ``` fence markers
    3. keep the span from the first '{' to the last '}'
    4. remove trailing commas before '}' or ']'
    5. quote bare object keys that follow '{' or ','
    6. turn single-quoted strings into double-quoted ones

Each pass assumes the previous ones already ran (the brace span is only
reliable once fences are gone). Passes 4-6 skip over double-quoted strings
so valid JSON comes through unchanged.
"""
import json
import re

FENCE_RE = re.compile(r'```(?:json|JSON)?')
OBJECT_SPAN_RE = re.compile(r'\{.*\}', re.DOTALL)

# Leftmost alternative consumes a complete double-quoted string, so the
# rewrite groups never match inside one.
_DQ = r'"(?:\\.|[^"\\])*"'
_SQ = r"'(?:\\.|[^'\\])*'"
TRAILING_COMMA_RE = re.compile(_DQ + '|' + _SQ + r'|,(\s*[}\]])')
BARE_KEY_RE = re.compile(_DQ + '|' + _SQ + r'|([{,]\s*)([A-Za-z_$][\w$]*)(\s*:)')
SINGLE_QUOTED_RE = re.compile(_DQ + r"|'((?:\\.|[^'\\])*)'")


def _drop_trailing_comma(match):
    if match.group(1) is None:
        return match.group(0)
    return match.group(1)


def _quote_bare_key(match):
    if match.group(1) is None:
        return match.group(0)
    return f'{match.group(1)}"{match.group(2)}"{match.group(3)}'


def _double_quote(match):
    inner = match.group(1)
    if inner is None:
        return match.group(0)
    inner = inner.replace("\\'", "'")
    inner = re.sub(r'(?<!\\)"', r'\\"', inner)
    return f'"{inner}"'


def sanitize(raw):
    """Best-effort cleanup of LLM text into something json.loads accepts.

    Never raises. The result may still be invalid JSON, in which case the
    caller's parse fails.
    """
    text = (raw or '').strip()
    text = FENCE_RE.sub('', text)

    match = OBJECT_SPAN_RE.search(text)
    if not match:
        return text
    text = match.group(0)

    text = TRAILING_COMMA_RE.sub(_drop_trailing_comma, text)
    text = BARE_KEY_RE.sub(_quote_bare_key, text)
    text = SINGLE_QUOTED_RE.sub(_double_quote, text)
    return text


def _fix_invalid_escapes(text):
    r"""Double every backslash that is not part of \" or \\.

    Only called after json.loads() has already failed. Models paste Windows
    paths (C:\Users) and regexes (\d+) into string values; these are invalid
    JSON escapes, so they are kept as literal backslashes instead.
    """
    result = []
    i = 0
    n = len(text)
    while i < n:
        if text[i] == '\\' and i + 1 < n:
            next_char = text[i + 1]
            if next_char in ('"', '\\'):
                result.append(text[i:i + 2])
            else:
                result.append('\\\\')
                result.append(next_char)
            i += 2
        else:
            result.append(text[i])
            i += 1
    return ''.join(result)


def parse_roadmap_json(raw):
    """Sanitize LLM text and parse it into a dict.

    Raises json.JSONDecodeError if no valid JSON survives sanitization,
    ValueError if the JSON is not an object or nests past the recursion limit.
    """
    cleaned = sanitize(raw)
    try:
        result = json.loads(cleaned)
    except RecursionError as e:
        raise ValueError(f"LLM JSON is nested too deeply: {cleaned[:100]}") from e
    except json.JSONDecodeError:
        result = json.loads(_fix_invalid_escapes(cleaned))

    if not isinstance(result, dict):
        raise ValueError(
            f"LLM returned {type(result).__name__}, expected object: {cleaned[:300]}"
        )
    return result
