"""
Customer notification package.

- base.py: ChannelAdapter interface and DeliveryOutcome
- providers/: one adapter per vendor
- registry.py: provider catalog and settings validation
- factory.py: adapter resolution per channel
- templates.py: message rendering
- dispatcher.py: channel selection, send and delivery log
- subscribers.py: wiring to reservation events
"""
