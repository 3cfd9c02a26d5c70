"""Data models and request URLs for crates.io, npm, GitHub and Wally."""