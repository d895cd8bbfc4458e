import re
import os

def get_all_matching_files(directory, pattern):
    """Files in directory whose name matches pattern, most recently modified first."""
    files = [f for f in os.listdir(directory) if re.match(pattern, f, re.IGNORECASE)]
    files_with_paths = [os.path.join(directory, f) for f in files]
    files_with_paths = [f for f in files_with_paths if os.path.isfile(f)]
    files_with_paths.sort(key=os.path.getmtime, reverse=True)
    return files_with_paths

def read_report_text(file_path):
    """Read a report file as bytes so the HTML parser can honour its declared charset."""
    with open(file_path, "rb") as file:
        return file.read()
