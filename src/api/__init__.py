"""API — camada de borda e adapters do Lemon Squeezy.

Responsabilidades:
- Receber webhooks e validar assinaturas e payloads
- Normalizar notificações para PaymentEvent
- Consultar a API REST (listagem de pedidos)
- Expor o contexto de pagamentos como resource MCP

Subpastas:
- connectors/: adapters HTTP por provedor
- normalizers/: conversão de payloads externos → modelos internos
- resources/: resources do servidor MCP
- routes/: endpoints HTTP (webhooks, health)

NÃO PODE conter: ciclo de vida das fontes, composição do runtime.
"""
