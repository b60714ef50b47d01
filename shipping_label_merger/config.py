"""
Shared configuration, constants and value records.
"""

# Standard Library
import dataclasses
import enum
import os
import pathlib


# A letter page is 792pt high, a half sheet 396pt.
HALF_SHEET_MAX_HEIGHT = 500.0
BULK_DETECT_MIN_HEIGHT = 600.0
LABEL_ROTATION = 90

PLACEHOLDER = "-"
FALLBACK_FILENAME = "combined-label"
SLIP_MARKER = "rubyvibeco.etsy.com"
LABEL_NAME_TOKEN = "label"
SLIP_NAME_SUFFIX = "_slip.pdf"

INPUT_DIR_ENV = "INPUT_DIR"
DEFAULT_INPUT_DIR_NAME = "input"


class SourceKind(enum.Enum):
	ETSY = "etsy"
	TIKTOK = "tiktok"
	UNKNOWN = "unknown"


class LabelPosition(enum.Enum):
	TOP = "top"
	BOTTOM = "bottom"


class LabelPlacement(enum.Enum):
	STANDALONE = "standalone"
	BULK_TOP = "bulk_top"
	BULK_BOTTOM = "bulk_bottom"


class SheetSize(enum.Enum):
	FULL = "full"
	HALF = "half"


@dataclasses.dataclass(frozen=True)
class CropProfile:
	"""
	Margins trimmed from each visual edge of a label after rotation.
	"""
	name: str
	top: float
	bottom: float
	left: float
	right: float


@dataclasses.dataclass(frozen=True)
class LayoutKind:
	sheet: SheetSize
	placement: LabelPlacement


STANDALONE_CROP = CropProfile(name="standalone", top=40.0, bottom=40.0, left=10.0, right=40.0)
BULK_TOP_CROP = CropProfile(name="bulk_top", top=70.0, bottom=70.0, left=27.0, right=64.0)
# the lower label sits further right on the sheet
BULK_BOTTOM_CROP = CropProfile(name="bulk_bottom", top=70.0, bottom=70.0, left=64.0, right=28.0)

CROP_PROFILES = {
	LabelPlacement.STANDALONE: STANDALONE_CROP,
	LabelPlacement.BULK_TOP: BULK_TOP_CROP,
	LabelPlacement.BULK_BOTTOM: BULK_BOTTOM_CROP,
}

# Heuristic: a label sheet with order ids that do not include the slip's id
# is still most likely a two-label sheet, so crop the top label.
UNMATCHED_LABEL_PLACEMENT = LabelPlacement.BULK_TOP


@dataclasses.dataclass(frozen=True)
class MergeOptions:
	"""
	Per-call overrides for the single label + slip merge.

	force_bulk pins a bulk placement at position (top when None).
	auto_detect=False skips content based detection. unmatched_placement
	is used when a label sheet carries order ids but none matches the
	slip; None keeps the label standalone in that case. alphanumeric_ids
	accepts letters in TikTok order ids on the slip.
	"""
	force_bulk: bool = False
	position: LabelPosition | None = None
	auto_detect: bool = True
	unmatched_placement: LabelPlacement | None = UNMATCHED_LABEL_PLACEMENT
	alphanumeric_ids: bool = False


#============================================
def default_input_dir() -> pathlib.Path:
	"""
	Resolve the default scan directory.

	Returns:
		Path from the INPUT_DIR environment variable, else ./input.
	"""
	value = os.environ.get(INPUT_DIR_ENV, "").strip()
	if value:
		return pathlib.Path(value).expanduser()
	return pathlib.Path.cwd() / DEFAULT_INPUT_DIR_NAME
