class ZeroViewsError(ZeroDivisionError):
    def __init__(self, video_id: str):
        super().__init__(f"Video {video_id!r} has zero views; engagement rate is undefined")
        self.video_id = video_id


class MalformedRecordError(ValueError):
    pass


class MalformedTrendingFileError(ValueError):
    pass


class UnknownBackendError(ValueError):
    def __init__(self, name: str, choices: tuple[str, ...]):
        super().__init__(f"Unknown backend {name!r} (choose from: {', '.join(choices)})")
        self.name = name


class CountrySelectionError(ValueError):
    pass


class UnknownCountryError(CountrySelectionError):
    def __init__(self, code: str):
        super().__init__(f"Invalid country code: {code}")
        self.code = code
