from re import compile as _re_compile


_valid_label = _re_compile(r"^[a-zA-Z_]$")


def is_valid_label(obj):
    # labels are single identifier characters, '_' included
    return isinstance(obj, str) and (_valid_label.match(obj) is not None)


# from a github gist by victorlei
def extclass(cls):
    return lambda f: (setattr(cls, f.__name__, f) or f)
