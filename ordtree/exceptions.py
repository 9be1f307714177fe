class TreeError(Exception):
    pass


class KeyNotFoundError(TreeError, KeyError):

    def __init__(self, key):
        super().__init__(key)
        self.key = key

    def __str__(self):
        return f"key not found: {self.key!r}"


class DuplicateKeyError(TreeError, ValueError):

    def __init__(self, key):
        super().__init__(key)
        self.key = key

    def __str__(self):
        return f"duplicate key: {self.key!r}"


class EmptyTreeError(KeyNotFoundError):

    def __init__(self):
        super().__init__(None)

    def __str__(self):
        return "tree is empty"
