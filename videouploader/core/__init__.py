"""Core building blocks of the video uploader."""
