# View-models: UI state and commands without widgets
