class DEFAULT:
    directory_path = "~/Downloads"
    report_filename_pattern = r".*\.html?$"
    be_tolerance = 0.0
    output_dir = "data/pine_scripts"
