import os

os.environ.setdefault('JWT_SECRET_KEY', 'test-only-secret-key-padded-to-thirty-two-bytes')
os.environ.setdefault('SEED_DEMO_DATA', 'true')
os.environ.setdefault('REJECT_INVALID_TOKENS', 'false')
