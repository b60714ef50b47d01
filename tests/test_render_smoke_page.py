import pathlib

import fitz
import PIL.Image

import shipping_label_merger.pipeline as pipeline

import fixture_pdfs


DPI = 72
INK_THRESHOLD = 128


#============================================
def _render_page(path: pathlib.Path, index: int) -> PIL.Image.Image:
	"""
	Render one PDF page to an RGB image.

	Args:
		path: PDF path.
		index: Page index.

	Returns:
		PIL image.
	"""
	document = fitz.open(path)
	page = document[index]
	scale = DPI / 72.0
	matrix = fitz.Matrix(scale, scale)
	pixmap = page.get_pixmap(matrix=matrix, alpha=False)
	image = PIL.Image.frombytes("RGB", [pixmap.width, pixmap.height], pixmap.samples)
	document.close()
	return image


#============================================
def _has_ink(image: PIL.Image.Image) -> bool:
	gray = image.convert("L")
	return any(value < INK_THRESHOLD for value in gray.getdata())


#============================================
def test_rendered_label_is_rotated_and_cropped(tmp_path: pathlib.Path) -> None:
	"""
	The merged label renders landscape at the crop size and keeps its art.
	"""
	label_bytes = fixture_pdfs.build_pdf(
		[[(60.0, 216.0, "USPS PRIORITY MAIL")]],
		fixture_pdfs.HALF_LABEL,
	)
	slip_bytes = fixture_pdfs.build_lines_pdf([["Order #: 555"]])
	result = pipeline.merge_one(label_bytes, slip_bytes)
	output_pdf = tmp_path / f"{result.filename}.pdf"
	output_pdf.write_bytes(result.pdf_bytes)

	label_image = _render_page(output_pdf, 0)
	# 288x432 page minus 40/40 and 10/40 margins, then turned on its side
	assert abs(label_image.width - 382) <= 1
	assert abs(label_image.height - 208) <= 1
	assert _has_ink(label_image)

	slip_image = _render_page(output_pdf, 1)
	assert slip_image.width < slip_image.height
