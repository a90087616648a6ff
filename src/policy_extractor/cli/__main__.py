from policy_extractor.cli import app

app()
