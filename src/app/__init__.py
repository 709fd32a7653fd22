"""App — orquestração do contexto de pagamentos e infraestrutura.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- domain/: PaymentEvent e IngestResult
- services/: leitura do contexto (sem IO direto)
- infra/: implementações concretas de IO (buffer, fontes, HTTP)
- protocols/: contratos/interfaces
- observability/: correlation_id para logs estruturados

Padrão: app executa; api adapta; utils apoia.
"""
