class GraphYamlError(Exception):
    pass


class GraphYamlParseError(GraphYamlError):
    def __init__(self, message: str):
        super().__init__(message)
