import configparser
import math
import os

from default import DEFAULT

class Config:
    def __init__(self, config_dir=None):
        self.config_dir = config_dir or os.path.dirname(os.path.abspath(__file__))
        self.config = self.load_config()
        self.directory_path = os.path.expanduser(self.get_string('general', 'directory_path', DEFAULT.directory_path))
        self.report_filename_pattern = self.get_string('general', 'report_filename_pattern', DEFAULT.report_filename_pattern)
        self.be_tolerance = self.get_float('general', 'be_tolerance', DEFAULT.be_tolerance)
        self.output_dir = self.get_string('general', 'output_dir', DEFAULT.output_dir)

        if self.be_tolerance < 0 or math.isnan(self.be_tolerance):
            print(f"Warning: Negative break-even tolerance '{self.be_tolerance}' in config. Using 0.")
            self.be_tolerance = 0.0

    def load_config(self, config_base_name="config"):
        config = configparser.ConfigParser()

        # use app directory as config directory unless told otherwise
        default_config_path = os.path.join(self.config_dir, f"{config_base_name}.ini")
        config.read(default_config_path)

        env = os.environ.get("CONFIG_ENV")
        if env:
            env_config_path = os.path.join(self.config_dir, f"{config_base_name}.{env}.ini")
            if os.path.exists(env_config_path):
                config.read(env_config_path)
                print(f"Loaded configuration for environment: {env}")
            else:
                print(f"Environment '{env}' specified, but config file '{env_config_path}' not found. Using default.")

        return config

    def get_float(self, section, option, default=0.0):
        try:
            return self.config.getfloat(section, option)
        except (configparser.NoSectionError, configparser.NoOptionError, ValueError):
            print(f"Warning: Invalid or missing number '{section}.{option}'. Using default: {default}")
            return default

    def get_string(self, section, option, default=""):
        try:
            return self.config.get(section, option)
        except (configparser.NoSectionError, configparser.NoOptionError):
            print(f"Warning: Option '{option}' not found in section '{section}'. Using default: {default}")
            return default
