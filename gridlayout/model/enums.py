from enum import Enum

class TrackSizeType(Enum):
    PIXEL = "px"
    PERCENTAGE = "%"
    FRACTION = "fr"

class ExportFormat(Enum):
    PNG = "PNG"
    JPEG = "JPEG"
    TIFF = "TIFF"

    @classmethod
    def from_name(cls, name: str) -> 'ExportFormat':
        upper = name.upper()
        if upper == "JPG":
            return cls.JPEG
        return cls(upper)
