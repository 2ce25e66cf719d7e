# gamecost/cli - Click 기반 CLI
