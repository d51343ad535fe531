from dataclasses import asdict


class BaseDataclass:
    def __str__(self):
        return str(asdict(self))
