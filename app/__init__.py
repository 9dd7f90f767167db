"""Pacote do proxy de alertas SigNoz/Alertmanager -> Telegram.

Este pacote contém:
- constants: variáveis de ambiente e textos fixos
- logging_config: inicialização do logging (texto ou JSON)
- models: lote de alertas, alerta e mensagem de saída
- utils: parsing/formatação de timestamps e helpers
- formatters: formatação e escape Markdown da mensagem
- transport: adapter do requests que registra toda chamada de saída
- services: integração com a Bot API do Telegram
- controller: criação do Flask app e endpoints
"""
