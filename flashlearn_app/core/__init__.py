"""Infrastructure shared by every FlashLearn module: config, extensions,
errors, logging, signals and the module registry."""
