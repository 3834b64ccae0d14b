"""Print the Gemini models Refyne would try for a refactor request, in order."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), ".."))

from refyne.ai_refactor import GeminiRefactorClient

client = GeminiRefactorClient()
if not client.is_configured:
    print("Error: GEMINI_API_KEY not found.")
    sys.exit(1)

print("--- Available Gemini Models ---")
for name in client.available_models():
    print(f"- {name}")

print("\n--- Refactor Candidate Order ---")
for idx, name in enumerate(client.model_candidates(), 1):
    print(f"{idx}. {name}")
