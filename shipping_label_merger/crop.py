"""
Rotation and crop box geometry for shipping label pages.

Labels are rotated 90 degrees clockwise. After rotation the unrotated
left/right edges become the visual top/bottom and the unrotated
bottom/top edges become the visual left/right. Crop profiles are written
in visual terms and are mapped back to the page's own coordinate space
here, because /CropBox is always expressed unrotated.
"""

# PIP3 modules
import pypdf
import pypdf.generic

# local repo modules
import shipping_label_merger as slm
import shipping_label_merger.config
import shipping_label_merger.errors
import shipping_label_merger.pdf_io


CropProfile = slm.config.CropProfile
LayoutKind = slm.config.LayoutKind
LabelPlacement = slm.config.LabelPlacement
LabelPosition = slm.config.LabelPosition
SheetSize = slm.config.SheetSize
LayoutError = slm.errors.LayoutError

CROP_PROFILES = slm.config.CROP_PROFILES
HALF_SHEET_MAX_HEIGHT = slm.config.HALF_SHEET_MAX_HEIGHT
LABEL_ROTATION = slm.config.LABEL_ROTATION


#============================================
def classify_sheet(height: float) -> SheetSize:
	"""
	Classify a page as a full or half sheet by its height.

	Args:
		height: Page height in points.

	Returns:
		SheetSize.HALF below the threshold, else SheetSize.FULL.
	"""
	if height < HALF_SHEET_MAX_HEIGHT:
		return SheetSize.HALF
	return SheetSize.FULL


#============================================
def profile_for_placement(placement: LabelPlacement) -> CropProfile:
	return CROP_PROFILES[placement]


#============================================
def placement_for_position(position: LabelPosition | None) -> LabelPlacement:
	"""
	Map a bulk half position to its crop placement; top when unknown.
	"""
	if position == LabelPosition.BOTTOM:
		return LabelPlacement.BULK_BOTTOM
	return LabelPlacement.BULK_TOP


#============================================
def compute_crop_box(
	width: float,
	height: float,
	sheet: SheetSize,
	profile: CropProfile,
	origin: tuple[float, float] = (0.0, 0.0),
) -> tuple[float, float, float, float]:
	"""
	Compute the unrotated crop box for a label page.

	Args:
		width: Page width in points.
		height: Page height in points.
		sheet: Full sheet (label in the upper half) or half sheet.
		profile: Visual margins to trim.
		origin: Lower-left corner of the media box.

	Returns:
		Crop box (x0, y0, x1, y1) in page coordinates.
	"""
	origin_x, origin_y = origin
	band_height = height
	band_offset = 0.0
	if sheet == SheetSize.FULL:
		band_height = height / 2.0
		band_offset = height / 2.0

	crop_width = width - profile.top - profile.bottom
	crop_height = band_height - profile.left - profile.right
	if crop_width <= 0.0 or crop_height <= 0.0:
		raise LayoutError(
			f"Crop profile {profile.name} leaves {crop_width:.1f}x{crop_height:.1f}"
			f" on a {width:.1f}x{height:.1f} {sheet.value} sheet"
		)

	x0 = origin_x + profile.top
	y0 = origin_y + band_offset + profile.left
	return (x0, y0, x0 + crop_width, y0 + crop_height)


#============================================
def apply_crop_rotate(
	page: pypdf.PageObject,
	layout: LayoutKind,
	profile: CropProfile,
) -> pypdf.PageObject:
	"""
	Rotate a copied label page and crop it to the label art.

	The page content stream is left untouched; only /Rotate and /CropBox
	change.

	Args:
		page: Page already copied into the output document.
		layout: Sheet size and placement of the label.
		profile: Crop profile for the placement.

	Returns:
		The same page, modified.
	"""
	width, height = slm.pdf_io.page_size(page)
	origin = slm.pdf_io.page_origin(page)
	crop_box = compute_crop_box(width, height, layout.sheet, profile, origin)
	page.rotation = LABEL_ROTATION
	page.cropbox = pypdf.generic.RectangleObject(crop_box)
	return page
