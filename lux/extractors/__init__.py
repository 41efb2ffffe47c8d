"""Site-specific extractors that turn page URLs into media stream data."""