"""Command-line interface for the Tiation SDK."""

import argparse
import json
import logging
import sys
from datetime import date
from typing import Optional

from tiation_sdk.client import TiationClient
from tiation_sdk.config.settings import Settings
from tiation_sdk.exceptions import TiationError
from tiation_sdk.utils.validators import METRIC_INTERVALS, parse_key_value_pairs, validate_required_settings


def setup_logging(log_level: str = "INFO", log_file: Optional[str] = None):
    """Setup logging configuration."""
    level = getattr(logging, log_level.upper(), logging.INFO)
    
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers
    )


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="tiation",
        description="Tiation SDK - command-line access to the Tiation API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Check configuration
  tiation config test
  
  # Track an event
  tiation track signup -p plan=pro --user-id u_123
  
  # Daily active users for January
  tiation metrics active_users --start 2024-01-01 --end 2024-01-31
  
  # Trigger a workflow with input
  tiation workflows trigger wf_42 -d '{"order_id": "o_1"}'
        """
    )
    
    subparsers = parser.add_subparsers(dest='command', help='Available commands')
    
    # Config command
    config_parser = subparsers.add_parser('config', help='Configuration management')
    config_subparsers = config_parser.add_subparsers(dest='config_action')
    config_subparsers.add_parser('show', help='Show current configuration')
    config_subparsers.add_parser('test', help='Test configuration')
    
    # Track command
    track_parser = subparsers.add_parser('track', help='Track an analytics event')
    track_parser.add_argument('name', help='Event name')
    track_parser.add_argument('-p', '--property', action='append', default=[], dest='properties',
                              metavar='KEY=VALUE', help='Event property (repeatable)')
    track_parser.add_argument('--user-id', help='User the event belongs to')
    
    # Metrics command
    metrics_parser = subparsers.add_parser('metrics', help='Query a metric time series')
    metrics_parser.add_argument('metric', help='Metric name')
    metrics_parser.add_argument('--start', required=True, type=date.fromisoformat, help='Start date (YYYY-MM-DD)')
    metrics_parser.add_argument('--end', required=True, type=date.fromisoformat, help='End date (YYYY-MM-DD)')
    metrics_parser.add_argument('--interval', choices=METRIC_INTERVALS, default='day', help='Bucket size')
    
    # Workflows command
    workflows_parser = subparsers.add_parser('workflows', help='Automation workflows')
    workflows_subparsers = workflows_parser.add_subparsers(dest='workflows_action')
    workflows_subparsers.add_parser('list', help='List workflows')
    trigger_parser = workflows_subparsers.add_parser('trigger', help='Trigger a workflow run')
    trigger_parser.add_argument('workflow_id', help='Workflow ID')
    trigger_parser.add_argument('-d', '--data', default=None, help='JSON input payload')
    trigger_parser.add_argument('--wait', action='store_true', help='Wait for the run to finish')
    
    # Content command
    content_parser = subparsers.add_parser('content', help='CMS content')
    content_subparsers = content_parser.add_subparsers(dest='content_action')
    list_content_parser = content_subparsers.add_parser('list', help='List content items')
    list_content_parser.add_argument('--type', dest='content_type', help='Content type filter')
    list_content_parser.add_argument('--status', help='Status filter')
    
    # Global options
    parser.add_argument('--log-level', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        default='WARNING', help='Logging level')
    parser.add_argument('--log-file', help='Log file path')
    parser.add_argument('--env-file', help='Environment file path')
    
    return parser


def command_config(args, settings: Settings):
    """Handle config command."""
    if args.config_action == 'show':
        print("Current Configuration:")
        print(f"  API Key: {settings.masked_api_key()}")
        print(f"  Base URL: {settings.base_url}")
        print(f"  Timeout: {settings.timeout}s")
        print(f"  Max Retries: {settings.max_retries}")
        print(f"  Batch Size: {settings.batch_size}")
        print(f"  Cache: {'enabled' if settings.cache_enabled else 'disabled'}")
        for problem in validate_required_settings(settings.api_key, settings.base_url):
            print(f"  Warning: {problem}")
        return 0
    
    elif args.config_action == 'test':
        print("Testing configuration...")
        try:
            settings.validate()
            print("Configuration is valid.")
            return 0
        except TiationError as e:
            print(f"Configuration error: {e}")
            return 1
    
    print("Usage: tiation config {show,test}")
    return 1


def command_track(args, client: TiationClient):
    """Handle track command."""
    properties = parse_key_value_pairs(args.properties)
    event = client.analytics.track(args.name, properties, user_id=args.user_id)
    print(f"Tracked event {event.name}" + (f" ({event.event_id})" if event.event_id else ""))
    return 0


def command_metrics(args, client: TiationClient):
    """Handle metrics command."""
    series = client.analytics.get_metrics(args.metric, args.start, args.end, interval=args.interval)
    print(f"{series.metric} per {series.interval}:")
    for point in series.points:
        print(f"  {point.timestamp.isoformat()}  {point.value:g}")
    print(f"Total: {series.total():g}  Average: {series.average():.2f}")
    peak = series.peak()
    if peak:
        print(f"Peak: {peak.value:g} at {peak.timestamp.isoformat()}")
    return 0


def command_workflows(args, client: TiationClient):
    """Handle workflows command."""
    if args.workflows_action == 'list':
        page = client.automation.list_workflows()
        if not page.items:
            print("No workflows found.")
        for workflow in page:
            state = "enabled" if workflow.enabled else "disabled"
            print(f"  {workflow.id}  {workflow.name} ({state}, {len(workflow.steps)} steps)")
        return 0
    
    elif args.workflows_action == 'trigger':
        payload = json.loads(args.data) if args.data else None
        run = client.automation.trigger_workflow(args.workflow_id, payload)
        print(f"Started run {run.id} ({run.status})")
        if args.wait:
            run = client.automation.wait_for_run(args.workflow_id, run.id)
            print(f"Run {run.id} finished: {run.status}")
            if run.error:
                print(f"  Error: {run.error}")
            return 0 if run.succeeded() else 1
        return 0
    
    print("Usage: tiation workflows {list,trigger}")
    return 1


def command_content(args, client: TiationClient):
    """Handle content command."""
    if args.content_action == 'list':
        page = client.cms.list_content(content_type=args.content_type, status=args.status)
        if not page.items:
            print("No content found.")
        for item in page:
            print(f"  {item.id}  [{item.status}] {item.title} ({item.content_type})")
        if page.has_more():
            print(f"  ... {page.total - len(page)} more")
        return 0
    
    print("Usage: tiation content list")
    return 1


CLIENT_COMMANDS = {
    'track': command_track,
    'metrics': command_metrics,
    'workflows': command_workflows,
    'content': command_content,
}


def main(argv=None):
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)
    
    # Setup logging
    setup_logging(args.log_level, args.log_file)
    
    # Show help if no command specified
    if not args.command:
        parser.print_help()
        return 0
    
    try:
        # Load settings
        settings = Settings.from_env(args.env_file)
        
        if args.command == 'config':
            return command_config(args, settings)
        
        handler = CLIENT_COMMANDS.get(args.command)
        if handler is None:
            print(f"Unknown command: {args.command}")
            return 1
        
        with TiationClient(settings=settings) as client:
            return handler(args, client)
    
    except (TiationError, ValueError) as e:
        print(f"Error: {e}")
        logging.error(f"Command {args.command} failed: {e}", exc_info=True)
        return 1


if __name__ == '__main__':
    sys.exit(main())
