# Escape sequences understood inside string literals: \n \t \\ \"
ESCAPES = {
    "n": "\n",
    "t": "\t",
    "\\": "\\",
    '"': '"',
}

_REVERSE = {v: "\\" + k for k, v in ESCAPES.items()}


def de_escape(raw: str) -> str:
    # raw is the literal's text between the quotes, exactly as lexed
    out = []
    escape = False
    for ch in raw:
        if escape:
            out.append(ESCAPES.get(ch, ch))
            escape = False
        elif ch == "\\":
            escape = True
        else:
            out.append(ch)
    return "".join(out)


def re_escape(text: str) -> str:
    return "".join(_REVERSE.get(ch, ch) for ch in text)
