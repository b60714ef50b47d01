"""
Exception types raised by the merge pipeline.
"""


class LabelMergeError(Exception):
	"""
	Base class for merge failures.
	"""


class LayoutError(LabelMergeError):
	"""
	Crop geometry collapsed to a non-positive width or height.
	"""


class DocumentLoadError(LabelMergeError):
	"""
	A buffer could not be read as a PDF document.
	"""
