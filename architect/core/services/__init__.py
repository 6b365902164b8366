"""Services: hashing, naming, change detection, ownership, generators and drafting."""
