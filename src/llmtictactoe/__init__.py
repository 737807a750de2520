"""
LLM Tic-Tac-Toe package.

Components:
- board/tactics: 3x3 board model, win lines, and immediate win/block detection
- prompting/move_validator: prompt build and move parsing/validation
- game/session: single-game runner with bounded retries, multi-game session and statistics
- llm_client/llm_player: minimal OpenAI-compatible transport (Ollama, LM Studio, hosted gateways)
"""
# Package exports are intentionally minimal; import modules directly as needed.
