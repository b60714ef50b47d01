"""
CLI entry points for merging shipping labels with order slips.
"""

# Standard Library
import argparse
import json
import pathlib
import sys
import time

# local repo modules
import shipping_label_merger as slm
import shipping_label_merger.config
import shipping_label_merger.pipeline


BatchResult = slm.pipeline.BatchResult


#============================================
def gather_pdf_files(inputs: list[str]) -> dict[str, bytes]:
	"""
	Read PDF files from input paths.

	Args:
		inputs: Files or directories (directories are not recursed).

	Returns:
		Mapping of file name to PDF bytes, sorted by name.
	"""
	paths: list[pathlib.Path] = []
	for entry in inputs:
		path = pathlib.Path(entry).expanduser().resolve()
		if path.is_dir():
			paths.extend(
				child for child in path.iterdir()
				if child.is_file() and child.suffix.lower() == ".pdf"
			)
			continue
		if path.is_file() and path.suffix.lower() == ".pdf":
			paths.append(path)
	files: dict[str, bytes] = {}
	for path in sorted(paths, key=lambda item: item.name.lower()):
		files[path.name] = path.read_bytes()
	return files


#============================================
def unique_output_path(output_dir: pathlib.Path, filename: str, used: set[str]) -> pathlib.Path:
	"""
	Build an output path, adding a numeric suffix on name collisions.

	Args:
		output_dir: Output directory.
		filename: Base filename without extension.
		used: Names already written in this run; updated in place.

	Returns:
		Output PDF path.
	"""
	candidate = filename
	counter = 2
	while candidate in used:
		candidate = f"{filename}_{counter}"
		counter += 1
	used.add(candidate)
	return output_dir / f"{candidate}.pdf"


#============================================
def write_results(batch: BatchResult, output_dir: pathlib.Path) -> list[dict]:
	"""
	Write merged PDFs and return manifest entries.
	"""
	output_dir.mkdir(parents=True, exist_ok=True)
	used: set[str] = set()
	entries: list[dict] = []
	for result in batch.results:
		path = unique_output_path(output_dir, result.filename, used)
		path.write_bytes(result.pdf_bytes)
		print(f"Wrote {path}")
		entries.append({"path": str(path), "metadata": result.metadata.as_dict()})
	return entries


#============================================
def write_manifest(manifest_path: pathlib.Path, entries: list[dict], errors: list[str]) -> None:
	"""
	Write a manifest JSON file.

	Args:
		manifest_path: Output path.
		entries: Written outputs with metadata.
		errors: Per-item error messages.
	"""
	data = {
		"results": entries,
		"errors": errors,
	}
	with manifest_path.open("w", encoding="utf-8") as handle:
		json.dump(data, handle, indent=2, sort_keys=True)


#============================================
def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
	"""
	Parse command line arguments.

	Returns:
		Parsed argparse namespace.
	"""
	parser = argparse.ArgumentParser(description="Merge shipping labels with their order slips.")
	parser.add_argument(
		"inputs",
		nargs="*",
		help="PDF files or directories (default: $INPUT_DIR or ./input).",
	)

	output_group = parser.add_argument_group("Output")
	output_group.add_argument("-o", "--output-dir", dest="output_dir", required=True, help="Output directory.")
	output_group.add_argument("-m", "--manifest", dest="manifest_path", default=None, help="Output manifest JSON path.")

	bulk_group = parser.add_argument_group("Bulk")
	bulk_group.add_argument("-b", "--bulk-labels", dest="bulk_labels", default=None, help="PDF of two-label sheets.")
	bulk_group.add_argument("-s", "--bulk-slips", dest="bulk_slips", default=None, help="PDF of slips for several orders.")

	parse_group = parser.add_argument_group("Parsing")
	parse_group.add_argument(
		"--alphanumeric-ids",
		dest="alphanumeric_ids",
		action="store_true",
		help="Accept letters in TikTok order ids.",
	)
	parser.set_defaults(alphanumeric_ids=False)

	parser.add_argument("-v", "--verbose", dest="verbose", action="store_true", help="Print layout decisions.")
	parser.set_defaults(verbose=False)

	args = parser.parse_args(argv)
	if (args.bulk_labels is None) != (args.bulk_slips is None):
		parser.error("--bulk-labels and --bulk-slips must be given together")
	return args


#============================================
def run_pipeline(args: argparse.Namespace) -> BatchResult:
	"""
	Run the merge for parsed arguments and write the outputs.

	Args:
		args: Parsed argparse namespace.

	Returns:
		BatchResult of the run.
	"""
	output_dir = pathlib.Path(args.output_dir)
	start_time = time.perf_counter()
	if args.bulk_labels is not None:
		print("Bulk label merge")
		print(f"Labels: {args.bulk_labels}")
		print(f"Slips: {args.bulk_slips}")
		label_bytes = pathlib.Path(args.bulk_labels).read_bytes()
		slip_bytes = pathlib.Path(args.bulk_slips).read_bytes()
		batch = slm.pipeline.merge_bulk(label_bytes, slip_bytes, verbose=args.verbose)
	else:
		inputs = args.inputs or [str(slm.config.default_input_dir())]
		print("Label merge")
		print(f"Inputs: {', '.join(inputs)}")
		files = gather_pdf_files(inputs)
		print(f"PDF files found: {len(files)}")
		options = slm.config.MergeOptions(alphanumeric_ids=args.alphanumeric_ids)
		batch = slm.pipeline.merge_file_pairs(files, options, verbose=args.verbose)
	merge_end = time.perf_counter()

	entries = write_results(batch, output_dir)
	for message in batch.errors:
		print(message)

	manifest_path = args.manifest_path
	if manifest_path is None:
		manifest_path = str(output_dir / "manifest.json")
	write_manifest(pathlib.Path(manifest_path), entries, batch.errors)

	total_time = time.perf_counter() - start_time
	print(f"Merged: {len(batch.results)}, errors: {len(batch.errors)}")
	print(
		"Timing: merge={:.2f}s total={:.2f}s".format(
			merge_end - start_time,
			total_time,
		)
	)
	print(f"Manifest written: {manifest_path}")
	return batch


#============================================
def main(argv: list[str] | None = None) -> int:
	"""
	Main entry point.
	"""
	args = parse_args(argv)
	batch = run_pipeline(args)
	if not batch.results and batch.errors:
		return 1
	return 0


if __name__ == "__main__":
	sys.exit(main())
