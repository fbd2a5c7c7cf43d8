# Data models for the reference library
